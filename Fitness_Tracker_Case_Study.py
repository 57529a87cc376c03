#%% Contents
# -----------------------------------------------------------------------------------------------
# ### Framework
# 1. Introduction
# 2. Package Imports
# 3. Profile Data
# 4. Command Line
# 5. Analysis
# -----------------------------------------------------------------------------------------------


#%% INTRODUCTION
"""
Project Title: Fitness Tracker Usage - Case Study
Description:
    This script analyzes four extracts of consumer fitness-tracker data (daily activity, daily sleep,
    hourly steps, hourly calories) to find usage trends, chart them and summarize recommendations
    for stakeholders.

Assumptions:
    - Dates are in month/day/year text; daily activity has no time part, sleep and hourly
      tables carry a 12-hour clock time. Any other format stops the run.
    - Sleep records are attributed to the calendar date of their SleepDay value.
    - Distance columns are not used; steps stand in for distance.
    - Exact duplicate rows are data entry repeats and are dropped before joining.
    - total_active_minutes sums the lightly, fairly and very active minutes that are present;
      it is missing only when all three are missing (sleep-only days).
    - Weeks run Monday to Sunday.
    - Correlations use every day where both variables were recorded, so each pair can
      have a different number of days.

Libraries Used:
    - os
    - argparse
    - pandas
    - numpy
    - sqlite3
    - matplotlib.pyplot
    - seaborn
    - ydata-profiling

Notes:
    - Grouped averages run as SQL against in-memory SQLite databases.
    - Charts go to the visuals folder, the report and aggregate tables to the output folder.
"""


#%% PACKAGE IMPORTS

import argparse
import os
import sys

from pandas.errors import MergeError

import fitbit_config as config
from fitbit_cleaning import LoadError, load_tables
from fitbit_merge import merge_tables
from fitbit_report import export_tables, render_report, save_report
from fitbit_statistics import (
    classify_users_by_steps,
    compute_correlations,
    correlations_to_frame,
    describe_daily,
    get_average_minutes_by_intensity,
    get_average_steps_by_day_of_week,
    get_average_steps_by_hour,
    summarize_columns,
    summarize_tables
)
from fitbit_visuals import create_visuals


#%% PROFILE DATA

def profile_tables(tables, folder):
    """Write a ydata-profiling HTML report for each cleaned table."""
    from ydata_profiling import ProfileReport

    os.makedirs(folder, exist_ok=True)
    paths = []
    for name, df in tables.items():
        path = os.path.join(folder, f"{name}_profile.html")
        ProfileReport(df, title=f"{name} profile").to_file(path)
        paths.append(path)
    return paths


#%% COMMAND LINE

def create_parser():
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='Fitness Tracker Case Study',
        description='Cleans, joins and analyzes fitness tracker extracts, then writes charts and a report.',
        epilog='Example: python Fitness_Tracker_Case_Study.py --data-folder data --output-folder output'
    )

    parser.add_argument('--data-folder', default=config.data_folder,
                        help='Folder holding the four input files (default: ./data)')
    parser.add_argument('--daily-activity', help='Daily activity file (default: <data-folder>/dailyActivity_merged.csv)')
    parser.add_argument('--sleep', help='Sleep file (default: <data-folder>/sleepDay_merged.csv)')
    parser.add_argument('--hourly-steps', help='Hourly steps file (default: <data-folder>/hourlySteps_merged.csv)')
    parser.add_argument('--hourly-calories',
                        help='Hourly calories file (default: <data-folder>/hourlyCalories_merged.csv)')
    parser.add_argument('--visuals-folder', default=config.visuals_folder,
                        help='Folder for chart images (default: ./visuals)')
    parser.add_argument('--output-folder', default=config.output_folder,
                        help='Folder for the report and aggregate tables (default: ./output)')
    parser.add_argument('--profile', action='store_true', default=config.profiling_run,
                        help='Also write ydata-profiling reports of the cleaned tables')
    parser.add_argument('--profiling-folder', default=config.profiling_folder,
                        help='Folder for profiling reports (default: ./profiling)')

    return parser


def input_paths(args):
    paths = config.default_paths(args.data_folder)
    overrides = {
        'daily_activity': args.daily_activity,
        'sleep_day': args.sleep,
        'hourly_steps': args.hourly_steps,
        'hourly_calories': args.hourly_calories
    }
    paths.update({name: path for name, path in overrides.items() if path})
    return paths


#%% ANALYSIS

def run_analysis(paths, visuals_folder, output_folder, profile=False, profiling_folder=config.profiling_folder):
    """Run load -> merge -> statistics -> charts/report and return the computed results."""

    #### Load & clean
    print("\nLoading data...")
    tables = load_tables(paths)
    for name, df in tables.items():
        print(f"  {name}: {len(df)} rows, {df['id'].nunique()} users")

    if profile:
        print("\nProfiling cleaned tables...")
        for path in profile_tables(tables, profiling_folder):
            print(f"  Profile saved to {path}")

    #### Merge
    print("\nMerging tables...")
    daily, hourly = merge_tables(tables)
    print(f"  daily_combined: {len(daily)} rows")
    print(f"  hourly_combined: {len(hourly)} rows")

    #### Statistics
    overview = summarize_tables(tables)
    means = describe_daily(daily)
    summary = summarize_columns(daily)
    steps_by_day = get_average_steps_by_day_of_week(daily)
    steps_by_hour = get_average_steps_by_hour(hourly)
    minutes_by_intensity = get_average_minutes_by_intensity(daily)
    users = classify_users_by_steps(daily)
    correlations = compute_correlations(daily)
    correlation_table = correlations_to_frame(correlations)

    print('')
    print('Daily averages: ')
    print(means.to_string())
    print('')
    print('Correlations: ')
    print(correlation_table.to_string(index=False))

    #### Charts & report
    chart_paths = create_visuals(daily, steps_by_day, steps_by_hour, minutes_by_intensity, users,
                                 correlations, visuals_folder)
    print('')
    print(f"{len(chart_paths)} visualizations saved to {visuals_folder}")

    report = render_report(overview, means, steps_by_day, steps_by_hour, minutes_by_intensity, users,
                           correlation_table)
    report_path = save_report(report, os.path.join(output_folder, config.REPORT_FILE_NAME))
    export_tables({
        'table_overview': overview,
        'daily_summary': summary,
        'avg_steps_by_day': steps_by_day,
        'avg_steps_by_hour': steps_by_hour,
        'avg_minutes_by_intensity': minutes_by_intensity,
        'users_by_activity_class': users,
        'correlations': correlation_table
    }, output_folder)
    print(f"Report saved to {report_path}")

    return {
        'tables': tables,
        'daily': daily,
        'hourly': hourly,
        'means': means,
        'steps_by_day': steps_by_day,
        'steps_by_hour': steps_by_hour,
        'minutes_by_intensity': minutes_by_intensity,
        'users': users,
        'correlations': correlations,
        'charts': chart_paths,
        'report': report_path
    }


def main(argv=None):
    """Main entry point for the case study."""
    args = create_parser().parse_args(argv)

    print("\nFitness Tracker Case Study")
    print("=" * 70)

    try:
        run_analysis(input_paths(args), args.visuals_folder, args.output_folder, args.profile,
                     args.profiling_folder)
    except FileNotFoundError as e:
        print(f"\nFile Error: {e}", flush=True)
        print("   Check that the input files exist and paths are correct.\n", flush=True)
        return 1
    except LoadError as e:
        print(f"\nData Validation Error: {e}", flush=True)
        print("   Check the input files for missing columns, malformed dates or non-numeric values.\n", flush=True)
        return 1
    except MergeError as e:
        print(f"\nJoin Error: {e}", flush=True)
        print("   A user id and date appear more than once in a table after de-duplication.\n", flush=True)
        return 1

    print("\n" + "=" * 70)
    print("Analysis complete!")
    print("=" * 70 + "\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
