"""
Folder layout, input files and raw table schemas for the fitness tracker case study.
"""

import os
from dataclasses import dataclass


# Set current working directory and define folder locations
cwd = os.getcwd()
data_folder = os.path.join(cwd, 'data')
visuals_folder = os.path.join(cwd, 'visuals')
output_folder = os.path.join(cwd, 'output')
profiling_folder = os.path.join(cwd, 'profiling')

# Set parameter to run when profiling reports need to be generated
profiling_run = False

REPORT_FILE_NAME = 'fitness_tracker_report.md'

# Fixed textual formats of the raw date columns
DATE_FORMAT = '%m/%d/%Y'
DATETIME_FORMAT = '%m/%d/%Y %I:%M:%S %p'

# Weekday convention used for day_of_week, Monday first
DAY_ORDER = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']

ACTIVE_MINUTE_COLUMNS = ['lightly_active_minutes', 'fairly_active_minutes', 'very_active_minutes']
INTENSITY_COLUMNS = ['sedentary_minutes'] + ACTIVE_MINUTE_COLUMNS

DESCRIPTIVE_COLUMNS = [
    'total_steps',
    'total_minutes_asleep',
    'sedentary_minutes',
    'calories',
    'total_active_minutes'
]

CORRELATION_PAIRS = [
    ('total_steps', 'calories'),
    ('total_steps', 'total_minutes_asleep'),
    ('sedentary_minutes', 'total_minutes_asleep'),
    ('lightly_active_minutes', 'total_minutes_asleep'),
    ('fairly_active_minutes', 'total_minutes_asleep'),
    ('very_active_minutes', 'total_minutes_asleep')
]

# Upper bounds (exclusive) of mean daily steps for each activity class
STEP_CLASSES = [
    (5000, 'sedentary'),
    (7500, 'lightly active'),
    (10000, 'fairly active'),
    (float('inf'), 'very active')
]


@dataclass(frozen=True)
class TableSchema:
    """Raw layout of one input table, in cleaned (snake_case) column names."""
    name: str
    file_name: str
    date_column: str
    canonical_date: str
    date_format: str
    required: tuple
    normalize_date: bool = True
    drop_columns: tuple = ()
    drop_suffix: str = None


DAILY_ACTIVITY = TableSchema(
    name='daily_activity',
    file_name='dailyActivity_merged.csv',
    date_column='activity_date',
    canonical_date='date',
    date_format=DATE_FORMAT,
    required=('id', 'activity_date', 'total_steps', 'very_active_minutes', 'fairly_active_minutes',
              'lightly_active_minutes', 'sedentary_minutes', 'calories'),
    drop_suffix='_distance'
)

SLEEP_DAY = TableSchema(
    name='sleep_day',
    file_name='sleepDay_merged.csv',
    date_column='sleep_day',
    canonical_date='date',
    date_format=DATETIME_FORMAT,
    required=('id', 'sleep_day', 'total_minutes_asleep'),
    drop_columns=('total_sleep_records',)
)

HOURLY_STEPS = TableSchema(
    name='hourly_steps',
    file_name='hourlySteps_merged.csv',
    date_column='activity_hour',
    canonical_date='activity_hour',
    date_format=DATETIME_FORMAT,
    required=('id', 'activity_hour', 'step_total'),
    normalize_date=False
)

HOURLY_CALORIES = TableSchema(
    name='hourly_calories',
    file_name='hourlyCalories_merged.csv',
    date_column='activity_hour',
    canonical_date='activity_hour',
    date_format=DATETIME_FORMAT,
    required=('id', 'activity_hour', 'calories'),
    normalize_date=False
)

SCHEMAS = {schema.name: schema for schema in (DAILY_ACTIVITY, SLEEP_DAY, HOURLY_STEPS, HOURLY_CALORIES)}


def default_paths(folder=data_folder):
    """Input file paths keyed by table name."""
    return {name: os.path.join(folder, schema.file_name) for name, schema in SCHEMAS.items()}
