"""Shared fixtures: small raw extracts in the layout of the source files."""

import os

import pandas as pd
import pytest

from fitbit_cleaning import clean_table
from fitbit_config import SCHEMAS
from fitbit_merge import merge_tables

USER_A = '1503960366'
USER_B = '1624580081'

ACTIVITY_COLUMNS = [
    'Id', 'ActivityDate', 'TotalSteps', 'TotalDistance', 'TrackerDistance', 'LoggedActivitiesDistance',
    'VeryActiveDistance', 'ModeratelyActiveDistance', 'LightActiveDistance', 'SedentaryActiveDistance',
    'VeryActiveMinutes', 'FairlyActiveMinutes', 'LightlyActiveMinutes', 'SedentaryMinutes', 'Calories'
]


def activity_row(user, day, steps, very, fairly, lightly, sedentary, calories):
    distances = ['8.5', '8.5', '0', '1.88', '0.55', '6.06', '0']
    return [user, day, steps] + distances + [very, fairly, lightly, sedentary, calories]


@pytest.fixture
def raw_activity():
    return pd.DataFrame([
        activity_row(USER_A, '4/12/2016', '13162', '25', '13', '328', '728', '1985'),
        activity_row(USER_A, '4/13/2016', '10735', '21', '19', '217', '776', '1797'),
        activity_row(USER_A, '4/17/2016', '3000', '0', '0', '100', '1200', '1500'),
        activity_row(USER_B, '4/12/2016', '8163', '30', '11', '181', '1218', '1776'),
        activity_row(USER_B, '4/12/2016', '8163', '30', '11', '181', '1218', '1776'),
        activity_row(USER_B, '4/13/2016', '6000', '5', '10', '150', '900', '1700'),
    ], columns=ACTIVITY_COLUMNS)


@pytest.fixture
def raw_sleep():
    return pd.DataFrame([
        [USER_A, '4/12/2016 12:00:00 AM', '1', '327', '346'],
        [USER_A, '4/13/2016 12:00:00 AM', '2', '384', '407'],
        [USER_A, '4/13/2016 12:00:00 AM', '2', '384', '407'],
        [USER_A, '4/15/2016 12:00:00 AM', '1', '412', '442'],
        [USER_B, '4/12/2016 12:00:00 AM', '1', '500', '520'],
    ], columns=['Id', 'SleepDay', 'TotalSleepRecords', 'TotalMinutesAsleep', 'TotalTimeInBed'])


@pytest.fixture
def raw_hourly_steps():
    return pd.DataFrame([
        [USER_A, '4/12/2016 12:00:00 AM', '373'],
        [USER_A, '4/12/2016 1:00:00 AM', '160'],
        [USER_A, '4/12/2016 3:00:00 PM', '50'],
        [USER_B, '4/12/2016 12:00:00 AM', '0'],
    ], columns=['Id', 'ActivityHour', 'StepTotal'])


@pytest.fixture
def raw_hourly_calories():
    return pd.DataFrame([
        [USER_A, '4/12/2016 12:00:00 AM', '81'],
        [USER_A, '4/12/2016 1:00:00 AM', '61'],
        [USER_A, '4/12/2016 2:00:00 AM', '59'],
        [USER_B, '4/12/2016 12:00:00 AM', '48'],
    ], columns=['Id', 'ActivityHour', 'Calories'])


@pytest.fixture
def raw_tables(raw_activity, raw_sleep, raw_hourly_steps, raw_hourly_calories):
    return {
        'daily_activity': raw_activity,
        'sleep_day': raw_sleep,
        'hourly_steps': raw_hourly_steps,
        'hourly_calories': raw_hourly_calories
    }


@pytest.fixture
def tables(raw_tables):
    return {name: clean_table(raw, SCHEMAS[name]) for name, raw in raw_tables.items()}


@pytest.fixture
def combined(tables):
    return merge_tables(tables)


@pytest.fixture
def daily(combined):
    return combined[0]


@pytest.fixture
def hourly(combined):
    return combined[1]


@pytest.fixture
def data_folder(tmp_path, raw_tables):
    """The raw fixtures written as CSV files with their usual file names."""
    folder = tmp_path / 'data'
    folder.mkdir()
    for name, raw in raw_tables.items():
        raw.to_csv(os.path.join(folder, SCHEMAS[name].file_name), index=False)
    return folder
