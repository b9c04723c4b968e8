"""
Region to timezone mapping for transfer-time analysis.

FPL exposes the manager's region name, not a timezone. Countries spanning
several zones map to their most populous one.
"""

from datetime import datetime
from typing import Dict
from zoneinfo import ZoneInfo

from .constants import PRICE_CHANGE_TIMEZONE, PRICE_RISE_WINDOW_MINUTES


REGION_TO_TIMEZONE: Dict[str, str] = {
    # Europe
    'England': 'Europe/London',
    'Scotland': 'Europe/London',
    'Wales': 'Europe/London',
    'Northern Ireland': 'Europe/London',
    'Ireland': 'Europe/Dublin',
    'Norway': 'Europe/Oslo',
    'Sweden': 'Europe/Stockholm',
    'Denmark': 'Europe/Copenhagen',
    'Germany': 'Europe/Berlin',
    'Netherlands': 'Europe/Amsterdam',
    'Belgium': 'Europe/Brussels',
    'France': 'Europe/Paris',
    'Spain': 'Europe/Madrid',
    'Portugal': 'Europe/Lisbon',
    'Italy': 'Europe/Rome',
    'Poland': 'Europe/Warsaw',
    'Romania': 'Europe/Bucharest',
    'Greece': 'Europe/Athens',
    'Turkey': 'Europe/Istanbul',
    'Russia': 'Europe/Moscow',

    # Asia
    'Singapore': 'Asia/Singapore',
    'India': 'Asia/Kolkata',
    'China': 'Asia/Shanghai',
    'Hong Kong': 'Asia/Hong_Kong',
    'Japan': 'Asia/Tokyo',
    'South Korea': 'Asia/Seoul',
    'Thailand': 'Asia/Bangkok',
    'Malaysia': 'Asia/Kuala_Lumpur',
    'Indonesia': 'Asia/Jakarta',
    'Philippines': 'Asia/Manila',
    'Vietnam': 'Asia/Ho_Chi_Minh',
    'Pakistan': 'Asia/Karachi',
    'Bangladesh': 'Asia/Dhaka',
    'United Arab Emirates': 'Asia/Dubai',
    'Saudi Arabia': 'Asia/Riyadh',
    'Israel': 'Asia/Jerusalem',

    # Americas
    'United States': 'America/New_York',
    'Canada': 'America/Toronto',
    'Mexico': 'America/Mexico_City',
    'Brazil': 'America/Sao_Paulo',
    'Argentina': 'America/Argentina/Buenos_Aires',
    'Chile': 'America/Santiago',
    'Colombia': 'America/Bogota',
    'Peru': 'America/Lima',
    'Venezuela': 'America/Caracas',

    # Oceania
    'Australia': 'Australia/Sydney',
    'New Zealand': 'Pacific/Auckland',

    # Africa
    'South Africa': 'Africa/Johannesburg',
    'Nigeria': 'Africa/Lagos',
    'Kenya': 'Africa/Nairobi',
    'Egypt': 'Africa/Cairo',
    'Ghana': 'Africa/Accra',
    'Morocco': 'Africa/Casablanca',
    'Algeria': 'Africa/Algiers',
}

DEFAULT_TIMEZONE = 'UTC'


def timezone_for_region(region_name: str) -> ZoneInfo:
    """
    Resolve a manager's region to a timezone.

    Args:
        region_name: FPL player_region_name, e.g. "England"

    Returns:
        ZoneInfo for the region, UTC when the region is unknown
    """
    return ZoneInfo(REGION_TO_TIMEZONE.get(region_name or '', DEFAULT_TIMEZONE))


def local_hour(moment: datetime, tz: ZoneInfo) -> int:
    """Hour of day (0-23) of an aware datetime in the given timezone."""
    return moment.astimezone(tz).hour


def is_price_rise_window(moment: datetime) -> bool:
    """
    Check whether a transfer landed just before the daily price change.

    Prices move at 09:30 Singapore time; transfers from 07:30 up to and
    including 09:30 SGT count as chasing a rise.
    """
    sgt = moment.astimezone(ZoneInfo(PRICE_CHANGE_TIMEZONE))
    minutes = sgt.hour * 60 + sgt.minute
    start, end = PRICE_RISE_WINDOW_MINUTES
    return start <= minutes <= end
