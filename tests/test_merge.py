"""Tests for joining the cleaned tables and the derived columns."""

import pandas as pd
import pytest
from pandas.errors import MergeError

from fitbit_config import DAY_ORDER
from fitbit_merge import add_day_of_week, add_total_active_minutes, merge_daily, merge_hourly

from conftest import USER_A, USER_B


def keys(df, columns):
    return set(map(tuple, df[columns].itertuples(index=False)))


class TestMergeDaily:

    def test_outer_join_keeps_every_key(self, tables, daily):
        activity_keys = keys(tables['daily_activity'], ['id', 'date'])
        sleep_keys = keys(tables['sleep_day'], ['id', 'date'])

        assert keys(daily, ['id', 'date']) == activity_keys | sleep_keys
        assert len(daily) >= max(len(activity_keys), len(sleep_keys))
        assert len(daily) == 6

    def test_unmatched_fields_are_null(self, daily):
        sleep_only = daily[(daily['id'] == USER_A) & (daily['date'] == pd.Timestamp('2016-04-15'))].iloc[0]
        assert sleep_only['total_steps'] is pd.NA
        assert sleep_only['total_active_minutes'] is pd.NA
        assert sleep_only['total_minutes_asleep'] == 412

        no_sleep = daily[(daily['id'] == USER_A) & (daily['date'] == pd.Timestamp('2016-04-17'))].iloc[0]
        assert no_sleep['total_minutes_asleep'] is pd.NA
        assert no_sleep['total_steps'] == 3000

    def test_sorted_by_user_and_date(self, daily):
        assert list(daily['id']) == [USER_A] * 4 + [USER_B] * 2
        assert daily.groupby('id')['date'].apply(lambda d: d.is_monotonic_increasing).all()

    def test_day_of_week(self, daily):
        assert list(daily['day_of_week'].cat.categories) == DAY_ORDER
        assert daily['day_of_week'].cat.ordered
        assert list(daily['day_of_week'].astype(str)) == [
            'Tuesday', 'Wednesday', 'Friday', 'Sunday', 'Tuesday', 'Wednesday'
        ]

    def test_total_active_minutes_is_sum_of_components(self, daily):
        components = daily[['lightly_active_minutes', 'fairly_active_minutes', 'very_active_minutes']]
        complete = components.notna().all(axis=1)
        expected = components[complete].sum(axis=1)
        assert (daily.loc[complete, 'total_active_minutes'] == expected).all()
        assert daily.loc[0, 'total_active_minutes'] == 328 + 13 + 25

    def test_duplicate_key_is_rejected(self, tables):
        activity = tables['daily_activity']
        repeated = pd.concat([activity, activity.iloc[[0]].assign(total_steps=1)], ignore_index=True)
        with pytest.raises(MergeError):
            merge_daily(repeated, tables['sleep_day'])

    def test_inputs_unchanged(self, tables):
        before = {name: df.copy() for name, df in tables.items()}
        merge_daily(tables['daily_activity'], tables['sleep_day'])
        for name in ('daily_activity', 'sleep_day'):
            pd.testing.assert_frame_equal(tables[name], before[name])


class TestTotalActiveMinutes:

    def frame(self, lightly, fairly, very):
        return pd.DataFrame({
            'lightly_active_minutes': pd.array(lightly, dtype='Int64'),
            'fairly_active_minutes': pd.array(fairly, dtype='Int64'),
            'very_active_minutes': pd.array(very, dtype='Int64')
        })

    def test_partially_missing_components_count_as_zero(self):
        df = add_total_active_minutes(self.frame([None], [10], [5]))
        assert df['total_active_minutes'].iloc[0] == 15

    def test_all_components_missing_gives_na(self):
        df = add_total_active_minutes(self.frame([None, 1], [None, 2], [None, 3]))
        assert df['total_active_minutes'].iloc[0] is pd.NA
        assert df['total_active_minutes'].iloc[1] == 6


class TestMergeHourly:

    def test_outer_join_on_timestamp_and_hour(self, tables, hourly):
        steps_keys = keys(tables['hourly_steps'], ['id', 'activity_hour', 'hour'])
        calorie_keys = keys(tables['hourly_calories'], ['id', 'activity_hour', 'hour'])
        assert keys(hourly, ['id', 'activity_hour', 'hour']) == steps_keys | calorie_keys
        assert len(hourly) == 5

    def test_unmatched_fields_are_null(self, hourly):
        user_a = hourly[hourly['id'] == USER_A].set_index('hour')
        assert user_a.loc[2, 'step_total'] is pd.NA
        assert user_a.loc[2, 'calories'] == 59
        assert user_a.loc[15, 'calories'] is pd.NA

    def test_day_of_week_from_timestamp(self, hourly):
        assert set(hourly['day_of_week'].astype(str)) == {'Tuesday'}

    def test_duplicate_key_is_rejected(self, tables):
        steps = tables['hourly_steps']
        repeated = pd.concat([steps, steps.iloc[[0]].assign(step_total=1)], ignore_index=True)
        with pytest.raises(MergeError):
            merge_hourly(repeated, tables['hourly_calories'])


def test_add_day_of_week_sunday():
    df = add_day_of_week(pd.DataFrame({'date': pd.to_datetime(['2016-04-17', '2016-04-18'])}))
    assert list(df['day_of_week'].astype(str)) == ['Sunday', 'Monday']
