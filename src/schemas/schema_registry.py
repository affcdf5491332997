"""
Central registry for all schema classes and their mappings.
This provides a single source of truth for dataset-to-schema relationships.
"""

# Schedule schemas
from schemas.schedule.calendar import Calendar
from schemas.schedule.calendar_dates import CalendarDates

# Dataset to Schema Class Mapping
DATASET_SCHEMA_MAPPING = {
    'calendar': Calendar,
    'calendar_dates': CalendarDates,
}

def get_schema_class(dataset: str):
    """
    Get the schema class for a dataset.

    Args:
        dataset: Dataset name (e.g., 'calendar', 'calendar_dates')

    Returns:
        Schema class or None if not found
    """
    return DATASET_SCHEMA_MAPPING.get(dataset)

# Export essential items
__all__ = [
    'DATASET_SCHEMA_MAPPING',
    'get_schema_class',
]
