"""
Schema Utilities
================

Utility functions for working with pandera schemas and DataFrames.
"""

import pandas as pd

from common.logging_utils import logger


def strip_text_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Strip surrounding whitespace from column names and text values.

    Args:
        df: Input DataFrame read as text

    Returns:
        DataFrame with stripped headers and cells
    """
    result_df = df.copy()
    result_df.columns = [str(col).strip() for col in result_df.columns]

    if result_df.empty:
        return result_df

    for col in result_df.select_dtypes(include=["object", "string"]).columns:
        result_df[col] = result_df[col].map(lambda value: value.strip() if isinstance(value, str) else value)

    return result_df


def drop_extra_columns_not_in_schema(df: pd.DataFrame, schema_class) -> pd.DataFrame:
    """
    Drop columns from the DataFrame that don't appear in the schema.
    Only keeps columns that are defined in the schema.

    Args:
        df: Input DataFrame
        schema_class: Pandera DataFrameModel class

    Returns:
        DataFrame with only columns that exist in the schema
    """
    schema_instance = schema_class.to_schema()

    # Get the list of columns from the schema
    schema_columns = set(schema_instance.columns.keys())

    # Get columns that exist in DataFrame but not in schema
    extra_columns = [col for col in df.columns if col not in schema_columns]

    if extra_columns:
        logger.debug(f"Dropped {len(extra_columns)} extra columns not in schema: {extra_columns}")
        return df.drop(columns=extra_columns)

    logger.debug("No extra columns found - all DataFrame columns are in schema")
    return df


def order_columns_by_schema(df: pd.DataFrame, schema_class) -> pd.DataFrame:
    """
    Order DataFrame columns to match the order they appear in the schema.

    Args:
        df: Input DataFrame
        schema_class: Pandera DataFrameModel class

    Returns:
        DataFrame with columns ordered according to schema field order
    """
    schema_instance = schema_class.to_schema()

    # Find columns that exist in both DataFrame and schema
    ordered_columns = [col for col in schema_instance.columns.keys() if col in df.columns]

    if ordered_columns:
        logger.debug(f"Ordered {len(ordered_columns)} columns according to schema order")
        return df[ordered_columns]

    logger.debug("No schema columns found in DataFrame, keeping original order")
    return df


def clean_and_validate_dataframe(df: pd.DataFrame, schema_class) -> pd.DataFrame:
    """
    Clean and validate a DataFrame using a schema class.

    Unlike warehouse loads, an empty table is still validated so that a file
    with a missing header column is reported rather than silently accepted.

    Args:
        df: Raw DataFrame to process
        schema_class: Pandera DataFrameModel class

    Returns:
        Processed and validated DataFrame

    Raises:
        pandera.errors.SchemaError: if a column is missing or a value fails a check
    """
    # 1. Normalize headers and cell whitespace
    df = strip_text_columns(df)

    # 2. Drop extra columns and sort the rest to match schema order
    df = drop_extra_columns_not_in_schema(df, schema_class)
    df = order_columns_by_schema(df, schema_class)

    # 3. Final validation using Pandera
    return schema_class.to_schema().validate(df)
