"""
Textual report: tables of the computed aggregates plus recommendations for a business audience.
"""

import os
from datetime import datetime

import pandas as pd

DAILY_STEP_GOAL = 10000
SLEEP_GOAL_MINUTES = 420
WEEKEND = ('Saturday', 'Sunday')


def _fmt(value, decimals=2):
    if pd.isna(value):
        return 'n/a'
    return f"{value:,.{decimals}f}"


def _table(df, index=True):
    text = df.to_string(index=index, float_format=lambda v: f"{v:,.2f}", na_rep='n/a')
    return f"```\n{text}\n```"


def _coefficient(correlations, x, y):
    match = correlations[(correlations['x'] == x) & (correlations['y'] == y)]
    if match.empty or pd.isna(match['coefficient'].iloc[0]):
        return None
    return float(match['coefficient'].iloc[0])


def has_afternoon_dip(steps_by_hour, hour=15):
    """True if `hour` averages fewer steps than every hour in 12-14 and 17-19."""
    by_hour = steps_by_hour.set_index('hour')['avg_steps']
    neighbours = [h for h in (12, 13, 14, 17, 18, 19) if h in by_hour.index]
    if hour not in by_hour.index or not neighbours:
        return False
    return all(by_hour[hour] < by_hour[h] for h in neighbours)


def recommendations(means, steps_by_day, steps_by_hour, users, correlations):
    """Plain-language recommendations derived from the computed aggregates."""
    items = []

    avg_steps = means.get('total_steps')
    if not pd.isna(avg_steps) and avg_steps < DAILY_STEP_GOAL:
        items.append(
            f"Users average {_fmt(avg_steps, 0)} steps a day, below the common {DAILY_STEP_GOAL:,} step goal. "
            "In-app step goals with progress nudges could close the gap."
        )

    if not steps_by_day.empty:
        lowest = steps_by_day.loc[steps_by_day['avg_steps'].idxmin()]
        day = lowest['day_of_week']
        campaign = 'weekend challenges' if day in WEEKEND else 'midweek challenges'
        items.append(
            f"{day} is the least active day ({_fmt(lowest['avg_steps'], 0)} steps on average). "
            f"Schedule motivational reminders and {campaign} for {day}."
        )

    if has_afternoon_dip(steps_by_hour):
        items.append(
            "Step counts dip around 3 pm compared with lunchtime and early evening. "
            "A mid-afternoon movement reminder targets that lull."
        )
    elif not steps_by_hour.empty:
        peak = int(steps_by_hour.loc[steps_by_hour['avg_steps'].idxmax(), 'hour'])
        items.append(f"Activity peaks at {peak}:00; time campaign notifications just ahead of it.")

    sedentary_sleep = _coefficient(correlations, 'sedentary_minutes', 'total_minutes_asleep')
    if sedentary_sleep is not None and sedentary_sleep <= -0.3:
        items.append(
            f"Sedentary time is negatively correlated with sleep (r = {sedentary_sleep:.2f}). "
            "Pair inactivity alerts with bedtime routines to market better sleep."
        )

    steps_calories = _coefficient(correlations, 'total_steps', 'calories')
    if steps_calories is not None and steps_calories >= 0.3:
        items.append(
            f"Steps and calories burned move together (r = {steps_calories:.2f}), "
            "so step counts are a simple, motivating proxy for energy expenditure."
        )

    avg_sleep = means.get('total_minutes_asleep')
    if not pd.isna(avg_sleep) and avg_sleep < SLEEP_GOAL_MINUTES:
        items.append(
            f"Users sleep {_fmt(avg_sleep / 60, 1)} hours a night on average, under 7 hours. "
            "Sleep tracking features and wind-down reminders are worth promoting."
        )

    if not users.empty:
        share = (users['activity_class'].isin(['sedentary', 'lightly active'])).mean()
        items.append(
            f"{share:.0%} of users average fewer than 7,500 steps a day; "
            "beginner-friendly programs fit most of the user base."
        )

    return items


def render_report(overview, means, steps_by_day, steps_by_hour, minutes_by_intensity, users, correlations):
    """Build the Markdown report text."""
    means_table = means.to_frame('mean').astype(float)
    class_counts = users['activity_class'].value_counts().rename('users').to_frame()

    sections = [
        "# Fitness Tracker Usage: Case Study Report",
        f"Generated {datetime.now():%Y-%m-%d %H:%M}",
        "## Data overview",
        "Four extracts of consumer fitness-tracker data (daily activity, daily sleep, hourly steps, "
        "hourly calories), cleaned and joined on user id and date. The sample is small and self-selected, "
        "so it scores low on the Reliable and Comprehensive parts of the ROCCC rubric; "
        "treat the findings as directional.",
        _table(overview),
        "## Daily averages",
        "Means over the days where each value was recorded.",
        _table(means_table),
        "## Average steps by day of the week",
        _table(steps_by_day, index=False),
        "## Average steps by hour of the day",
        _table(steps_by_hour, index=False),
        "## Average minutes by activity intensity",
        _table(minutes_by_intensity, index=False),
        "## Users by activity class",
        _table(class_counts),
        "## Correlations",
        "Pearson correlation over days where both values were recorded, rounded to two decimals.",
        _table(correlations, index=False),
        "## Recommendations"
    ]
    items = recommendations(means, steps_by_day, steps_by_hour, users, correlations)
    sections.append("\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1)))

    return "\n\n".join(sections) + "\n"


def save_report(text, filepath):
    """Write the report text to filepath."""
    folder = os.path.dirname(filepath)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(filepath, 'w') as f:
        f.write(text)
    return filepath


def export_tables(tables, folder):
    """Write each {name: DataFrame} aggregate to <folder>/<name>.csv."""
    os.makedirs(folder, exist_ok=True)
    paths = []
    for name, df in tables.items():
        path = os.path.join(folder, f"{name}.csv")
        df.to_csv(path, index=not isinstance(df.index, pd.RangeIndex))
        paths.append(path)
    return paths
