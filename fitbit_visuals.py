"""
Charts for the fitness tracker case study. Every function saves one PNG and closes its figure.
"""

import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns

BAR_COLOR = '#300D38'
HIGHLIGHT_COLOR = '#D9534F'

LABELS = {
    'total_steps': 'Total Steps',
    'calories': 'Calories',
    'total_minutes_asleep': 'Minutes Asleep',
    'sedentary_minutes': 'Sedentary Minutes',
    'lightly_active_minutes': 'Lightly Active Minutes',
    'fairly_active_minutes': 'Fairly Active Minutes',
    'very_active_minutes': 'Very Active Minutes'
}


def set_style():
    # Set seaborn style (no grid)
    sns.set_style("white")

    # Set font
    plt.rcParams['font.family'] = 'sans-serif'
    plt.rcParams['font.sans-serif'] = ['Arial', 'DejaVu Sans']


def label(column):
    return LABELS.get(column, column.replace('_', ' ').title())


def _add_bar_labels(ax):
    # Add numeric labels to the bars
    for bar in ax.patches:
        height = bar.get_height()
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            height,  # Place labels directly above the bars
            round(height),
            ha='center',
            va='bottom',
            fontsize=9,
            color='black',
            bbox=dict(facecolor='white', alpha=0.5, edgecolor='none', pad=2)
        )


def _save(fig, output_path):
    fig.tight_layout(pad=2)
    fig.savefig(output_path, dpi=300)
    plt.close(fig)
    return output_path


def plot_average_steps_by_day(steps_by_day, output_path):
    """Bar chart of average daily steps per weekday, the lowest day highlighted."""
    set_style()
    lowest = steps_by_day['avg_steps'].idxmin()
    colors = [HIGHLIGHT_COLOR if i == lowest else BAR_COLOR for i in steps_by_day.index]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(steps_by_day['day_of_week'].astype(str), steps_by_day['avg_steps'], color=colors, width=0.7)
    _add_bar_labels(ax)

    ax.set_title('Average Steps by Day of the Week', fontsize=16, fontweight='bold')
    ax.set_ylabel('Average Total Steps', fontsize=12)
    ax.set_xlabel('Day of the Week', fontsize=12)
    return _save(fig, output_path)


def plot_average_steps_by_hour(steps_by_hour, output_path):
    """Bar chart of average steps per hour of the day."""
    set_style()
    fig, ax = plt.subplots(figsize=(14, 6))
    ax.bar(steps_by_hour['hour'], steps_by_hour['avg_steps'], color=BAR_COLOR, width=0.7)

    ax.set_title('Average Steps by Hour of the Day', fontsize=16, fontweight='bold')
    ax.set_ylabel('Average Steps', fontsize=12)
    ax.set_xlabel('Hour of the Day', fontsize=12)
    ax.set_xticks(list(range(24)))
    return _save(fig, output_path)


def plot_minutes_by_intensity(minutes_by_intensity, output_path):
    """Bar chart of the average daily minutes at each activity intensity."""
    set_style()
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(
        [label(name) for name in minutes_by_intensity['intensity']],
        minutes_by_intensity['avg_minutes'],
        color=BAR_COLOR,
        width=0.7
    )
    _add_bar_labels(ax)

    ax.set_title('Average Daily Minutes by Activity Intensity', fontsize=16, fontweight='bold')
    ax.set_ylabel('Minutes', fontsize=12)
    plt.setp(ax.get_xticklabels(), rotation=20, ha='right')
    return _save(fig, output_path)


def plot_users_by_activity_class(users, output_path):
    """Bar chart of the number of users in each step-based activity class."""
    set_style()
    counts = users['activity_class'].value_counts()

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(counts.index, counts.values, color=BAR_COLOR, width=0.7)
    _add_bar_labels(ax)

    ax.set_title('Users by Average Daily Steps', fontsize=16, fontweight='bold')
    ax.set_ylabel('Number of Users', fontsize=12)
    ax.set_xlabel('Activity Class', fontsize=12)
    return _save(fig, output_path)


def plot_correlation(daily, result, output_path):
    """Scatter plot of one correlation pair with a fitted line when the coefficient is defined."""
    set_style()
    pairs = daily[[result.x, result.y]].dropna().astype(float)

    fig, ax = plt.subplots(figsize=(8, 6))
    if result.is_defined:
        sns.regplot(
            data=pairs, x=result.x, y=result.y, ax=ax,
            scatter_kws={'alpha': 0.4, 'color': BAR_COLOR},
            line_kws={'color': HIGHLIGHT_COLOR}
        )
        caption = f"r = {result.coefficient:.2f} (n = {result.n_obs})"
    else:
        sns.scatterplot(data=pairs, x=result.x, y=result.y, ax=ax, alpha=0.4, color=BAR_COLOR)
        caption = f"r undefined: {result.reason}"

    ax.set_title(f"{label(result.x)} vs {label(result.y)}", fontsize=16, fontweight='bold')
    ax.set_xlabel(label(result.x), fontsize=12)
    ax.set_ylabel(label(result.y), fontsize=12)
    ax.text(0.02, 0.96, caption, transform=ax.transAxes, va='top', fontsize=11,
            bbox=dict(facecolor='white', alpha=0.7, edgecolor='none', pad=3))
    return _save(fig, output_path)


def create_visuals(daily, steps_by_day, steps_by_hour, minutes_by_intensity, users, correlations, folder):
    """Render every chart into folder and return the saved paths."""
    os.makedirs(folder, exist_ok=True)

    paths = [
        plot_average_steps_by_day(steps_by_day, os.path.join(folder, 'avg_steps_by_day.png')),
        plot_average_steps_by_hour(steps_by_hour, os.path.join(folder, 'avg_steps_by_hour.png')),
        plot_minutes_by_intensity(minutes_by_intensity, os.path.join(folder, 'avg_minutes_by_intensity.png')),
        plot_users_by_activity_class(users, os.path.join(folder, 'users_by_activity_class.png'))
    ]
    for result in correlations:
        file_name = f"corr_{result.x}_vs_{result.y}.png"
        paths.append(plot_correlation(daily, result, os.path.join(folder, file_name)))

    return paths
