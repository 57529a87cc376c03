"""
Loading and cleaning of the raw fitness tracker extracts.

Each raw table is read as text and cleaned the same way:
- column names normalized to lower_snake_case
- user id kept as text
- date column renamed to `date` (daily tables) or `activity_hour` (hourly tables)
  and parsed with the table's fixed month/day/year format
- distance columns and the sleep record count dropped
- value columns parsed into nullable numeric dtypes (missing cells are pd.NA)
- exact duplicate rows removed

Anything malformed fails the load of that table with a LoadError.
"""

import pandas as pd

from fitbit_config import SCHEMAS


class LoadError(ValueError):
    """A raw table could not be cleaned."""

    def __init__(self, table, message):
        self.table = table
        super().__init__(f"{table}: {message}" if table else message)


def clean_names(df):
    """Return a copy of df with lower_snake_case column names (TotalSteps -> total_steps)."""
    columns = (
        df.columns.astype(str).str.strip()
        .str.replace(r'(?<=[A-Z])(?=[A-Z][a-z])', '_', regex=True)
        .str.replace(r'(?<=[a-z0-9])(?=[A-Z])', '_', regex=True)
        .str.replace(r'[^0-9A-Za-z]+', '_', regex=True)
        .str.strip('_')
        .str.lower()
    )
    return df.set_axis(columns, axis=1)


def check_required_columns(df, required, table=None):
    missing_columns = set(required) - set(df.columns)
    if missing_columns:
        raise LoadError(
            table,
            f"Missing required columns: {', '.join(sorted(missing_columns))}. "
            f"Required: {', '.join(sorted(required))}"
        )


def drop_duplicate_rows(df):
    """Drop exact duplicate rows. Applying it twice gives the same table."""
    return df.drop_duplicates(ignore_index=True)


def coerce_user_id(df, column='id', table=None):
    """Set the user id column to text so every table joins on the same key type."""
    ids = df[column].astype('string').str.strip().replace('', pd.NA)
    if ids.isna().any():
        raise LoadError(table, f"Missing user id in '{column}' at row {ids.isna().idxmax()}")
    return df.assign(**{column: ids})


def _as_text(values):
    if pd.api.types.is_object_dtype(values) or pd.api.types.is_string_dtype(values):
        return values.str.strip()
    return values


def parse_dates(df, column, date_format, normalize=False, table=None):
    """
    Parse a month/day/year[ time] text column with a fixed format.

    With normalize=True the time part is truncated so daily tables join on the calendar date.
    """
    values = df[column]
    missing = values.isna()
    if missing.any():
        raise LoadError(table, f"Missing value in '{column}' at row {missing.idxmax()}")

    try:
        parsed = pd.to_datetime(_as_text(values.astype(str)), format=date_format)
    except ValueError as e:
        raise LoadError(table, f"Invalid date in '{column}', expected format '{date_format}'. {e}")

    if normalize:
        parsed = parsed.dt.normalize()
    return df.assign(**{column: parsed})


def parse_numeric(df, columns, table=None):
    """Parse value columns into nullable Int64/Float64; empty cells become pd.NA."""
    parsed = {}
    for col in columns:
        try:
            values = pd.to_numeric(_as_text(df[col]))
        except (ValueError, TypeError) as e:
            raise LoadError(table, f"Non-numeric value in '{col}'. {e}")
        parsed[col] = values.convert_dtypes()
    return df.assign(**parsed)


def add_hour(df, column='activity_hour'):
    """Add the hour of day (0-23) of an hourly timestamp."""
    return df.assign(hour=df[column].dt.hour.astype('int64'))


def unused_columns(df, schema):
    return [
        col for col in df.columns
        if col in schema.drop_columns or (schema.drop_suffix and col.endswith(schema.drop_suffix))
    ]


def clean_table(raw, schema):
    """Clean one raw table according to its schema."""
    table = schema.name
    df = clean_names(raw)
    check_required_columns(df, schema.required, table)
    if df.empty:
        raise LoadError(table, "Table has a header but no data rows")

    df = coerce_user_id(df, table=table)
    df = df.rename(columns={schema.date_column: schema.canonical_date})
    df = df.drop(columns=unused_columns(df, schema))
    df = parse_dates(df, schema.canonical_date, schema.date_format, schema.normalize_date, table)

    value_columns = [col for col in df.columns if col not in ('id', schema.canonical_date)]
    df = parse_numeric(df, value_columns, table)

    # Duplicates are compared on the parsed values, before any join
    df = drop_duplicate_rows(df)

    if schema.canonical_date == 'activity_hour':
        df = add_hour(df)
    return df


def load_table(path, schema):
    """Read a delimited file as text and clean it."""
    try:
        raw = pd.read_csv(path, dtype=str)
    except FileNotFoundError:
        raise FileNotFoundError(f"{schema.name} data file not found: {path}")
    except pd.errors.EmptyDataError:
        raise LoadError(schema.name, f"Data file is empty: {path}")
    except UnicodeDecodeError as e:
        raise LoadError(schema.name, f"Data file is not valid UTF-8 text: {path}. {e}")
    except pd.errors.ParserError as e:
        raise LoadError(schema.name, f"Data file is not a well-formed CSV: {path}. {e}")
    return clean_table(raw, schema)


def load_tables(paths):
    """Load the four cleaned tables from a {table name: path} mapping."""
    return {name: load_table(paths[name], schema) for name, schema in SCHEMAS.items()}
