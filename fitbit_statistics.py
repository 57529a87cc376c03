"""
Descriptive statistics, grouped means and Pearson correlations over the combined tables.
"""

import sqlite3
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from fitbit_config import (
    CORRELATION_PAIRS,
    DAY_ORDER,
    DESCRIPTIVE_COLUMNS,
    INTENSITY_COLUMNS,
    STEP_CLASSES
)


class UndefinedCorrelationError(ValueError):
    """The correlation of the given values has no numeric result."""


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson correlation of one variable pair; coefficient is None when undefined."""
    x: str
    y: str
    n_obs: int
    coefficient: Optional[float] = None
    reason: Optional[str] = None

    @property
    def is_defined(self):
        return self.coefficient is not None


#### Descriptive statistics

def describe_daily(daily, columns=DESCRIPTIVE_COLUMNS):
    """Mean of each column over its non-null values (pd.NA for an all-null column)."""
    means = [daily[col].astype('Float64').mean() for col in columns]
    return pd.Series(means, index=list(columns), dtype='Float64', name='mean')


def summarize_columns(df, columns=DESCRIPTIVE_COLUMNS):
    """Count, mean, std, min, median and max per column, nulls excluded."""
    values = df[list(columns)].astype('Float64')
    summary = pd.DataFrame({
        'count': values.count(),
        'mean': values.mean(),
        'std': values.std(),
        'min': values.min(),
        'median': values.median(),
        'max': values.max()
    })
    return summary.astype({'count': 'int64'})


def summarize_tables(tables):
    """Rows, distinct users and date range of each cleaned table."""
    rows = []
    for name, df in tables.items():
        date_column = 'date' if 'date' in df.columns else 'activity_hour'
        rows.append({
            'table': name,
            'rows': len(df),
            'users': df['id'].nunique(),
            'first_date': df[date_column].min(),
            'last_date': df[date_column].max()
        })
    return pd.DataFrame(rows).set_index('table')


#### Grouped means (SQL in python)

def _run_query(df, query, table_name):
    # Create an in-memory SQLite database
    conn = sqlite3.connect(':memory:')

    try:
        df.to_sql(table_name, conn, index=False, if_exists='replace')
        result_df = pd.read_sql_query(query, conn)
    finally:
        conn.close()

    return result_df


def get_average_steps_by_day_of_week(daily):
    """Average total_steps per weekday, Monday first."""
    steps = daily[['day_of_week', 'total_steps']].astype({'day_of_week': str, 'total_steps': float})

    query = """
    SELECT day_of_week
        ,AVG(total_steps) AS avg_steps
    FROM daily_table
    WHERE total_steps IS NOT NULL
    GROUP BY day_of_week;
    """

    result_df = _run_query(steps, query, 'daily_table')
    result_df = result_df.set_index('day_of_week').reindex(DAY_ORDER).dropna()
    return result_df.rename_axis('day_of_week').reset_index()


def get_average_steps_by_hour(hourly):
    """Average step_total per hour of day."""
    steps = hourly[['hour', 'step_total']].astype({'hour': int, 'step_total': float})

    query = """
    SELECT hour
        ,AVG(step_total) AS avg_steps
    FROM hourly_table
    WHERE step_total IS NOT NULL
    GROUP BY hour
    ORDER BY hour;
    """

    return _run_query(steps, query, 'hourly_table')


def get_average_minutes_by_intensity(daily):
    """Average daily minutes spent at each activity intensity."""
    minutes = daily[INTENSITY_COLUMNS].astype(float)

    query = """
    SELECT AVG(sedentary_minutes) AS sedentary_minutes
        ,AVG(lightly_active_minutes) AS lightly_active_minutes
        ,AVG(fairly_active_minutes) AS fairly_active_minutes
        ,AVG(very_active_minutes) AS very_active_minutes
    FROM daily_table;
    """

    result_df = _run_query(minutes, query, 'daily_table')
    return result_df.T.rename(columns={0: 'avg_minutes'}).rename_axis('intensity').reset_index()


def classify_steps(avg_steps):
    for upper_bound, label in STEP_CLASSES:
        if avg_steps < upper_bound:
            return label


def classify_users_by_steps(daily):
    """Each user's mean daily steps and activity class."""
    steps = daily[['id', 'total_steps']].astype({'id': str, 'total_steps': float})

    query = """
    SELECT id
        ,AVG(total_steps) AS avg_steps
        ,COUNT(total_steps) AS days_logged
    FROM daily_table
    WHERE total_steps IS NOT NULL
    GROUP BY id
    ORDER BY id;
    """

    users = _run_query(steps, query, 'daily_table')
    users['activity_class'] = users['avg_steps'].apply(classify_steps)
    return users


#### Correlations

def pearson_correlation(x, y):
    """
    Pearson correlation coefficient of two equal-length sequences of paired values.

    The result does not depend on argument order and is clipped to [-1, 1].
    Raises UndefinedCorrelationError for fewer than two pairs or a constant variable.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"Paired values must have the same length, got {len(x)} and {len(y)}")
    if len(x) < 2:
        raise UndefinedCorrelationError(f"fewer than two paired observations ({len(x)})")

    # Checked on the raw values; the centred sums of a constant float column need not be exactly 0
    if x.min() == x.max() or y.min() == y.max():
        raise UndefinedCorrelationError("zero variance")

    dx = x - x.mean()
    dy = y - y.mean()
    sxx = np.sum(dx * dx)
    syy = np.sum(dy * dy)

    r = np.sum(dx * dy) / np.sqrt(sxx * syy)
    return float(np.clip(r, -1.0, 1.0))


def correlate(df, x, y, decimals=2):
    """Correlation of two columns over the rows where both are present."""
    pairs = df[[x, y]].dropna()
    try:
        r = pearson_correlation(pairs[x].astype(float), pairs[y].astype(float))
    except UndefinedCorrelationError as e:
        return CorrelationResult(x, y, len(pairs), reason=str(e))
    return CorrelationResult(x, y, len(pairs), coefficient=round(r, decimals))


def compute_correlations(daily, pairs=CORRELATION_PAIRS):
    return [correlate(daily, x, y) for x, y in pairs]


def correlations_to_frame(results):
    """Tabulate correlation results; undefined coefficients are pd.NA with the reason in `status`."""
    frame = pd.DataFrame({
        'x': [r.x for r in results],
        'y': [r.y for r in results],
        'n_obs': [r.n_obs for r in results],
        'coefficient': pd.array([r.coefficient if r.is_defined else pd.NA for r in results], dtype='Float64'),
        'status': ['ok' if r.is_defined else f"undefined: {r.reason}" for r in results]
    })
    return frame
