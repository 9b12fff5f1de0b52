"""Italian national holidays, used to flag meetings in the calendar view"""

from datetime import date, timedelta

from dateutil.easter import easter

FIXED_HOLIDAYS = {
    (1, 1): "Capodanno",
    (1, 6): "Epifania",
    (4, 25): "Liberazione",
    (5, 1): "Festa del Lavoro",
    (6, 2): "Festa della Repubblica",
    (8, 15): "Ferragosto",
    (11, 1): "Ognissanti",
    (12, 8): "Immacolata",
    (12, 25): "Natale",
    (12, 26): "Santo Stefano",
}


def italian_holidays(year: int) -> dict[date, str]:
    """Map of holiday date -> holiday name for the given year"""
    holidays = {date(year, month, day): name for (month, day), name in FIXED_HOLIDAYS.items()}

    easter_sunday = easter(year)
    holidays[easter_sunday] = "Pasqua"
    holidays[easter_sunday + timedelta(days=1)] = "Pasquetta"
    return holidays


def holiday_name(value: date):
    """Holiday name for the date, or None on a working day"""
    return italian_holidays(value.year).get(value)


def is_italian_holiday(value: date) -> bool:
    return holiday_name(value) is not None
