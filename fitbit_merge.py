"""
Joining the cleaned tables and deriving calendar and activity columns.
"""

import pandas as pd

from fitbit_config import ACTIVE_MINUTE_COLUMNS, DAY_ORDER

DAILY_KEYS = ['id', 'date']
HOURLY_KEYS = ['id', 'activity_hour', 'hour']


def add_day_of_week(df, column='date'):
    """Add the full weekday name of `column` as an ordered categorical, Monday first."""
    day_of_week = pd.Categorical(df[column].dt.day_name(), categories=DAY_ORDER, ordered=True)
    return df.assign(day_of_week=day_of_week)


def add_total_active_minutes(df):
    """
    Add lightly + fairly + very active minutes.

    A missing component counts as zero when the row has at least one component;
    a row with none of them (e.g. a sleep-only day) gets pd.NA.
    """
    total = df[ACTIVE_MINUTE_COLUMNS].astype('Float64').sum(axis=1, min_count=1)
    return df.assign(total_active_minutes=total.convert_dtypes())


def merge_daily(activity, sleep):
    """Outer join daily activity and sleep on (id, date)."""
    daily = pd.merge(activity, sleep, on=DAILY_KEYS, how='outer', validate='one_to_one')
    daily = daily.sort_values(DAILY_KEYS, ignore_index=True)
    daily = add_day_of_week(daily, 'date')
    return add_total_active_minutes(daily)


def merge_hourly(steps, calories):
    """Outer join hourly steps and hourly calories on (id, activity_hour, hour)."""
    hourly = pd.merge(steps, calories, on=HOURLY_KEYS, how='outer', validate='one_to_one')
    hourly = hourly.sort_values(['id', 'activity_hour'], ignore_index=True)
    return add_day_of_week(hourly, 'activity_hour')


def merge_tables(tables):
    """Build (daily_combined, hourly_combined) from the four cleaned tables."""
    daily = merge_daily(tables['daily_activity'], tables['sleep_day'])
    hourly = merge_hourly(tables['hourly_steps'], tables['hourly_calories'])
    return daily, hourly
