"""
Enumerated Categorical Types

BTS publishes month and weekday as integer codes. They are converted to
fixed-label categoricals so that every category exists (and keeps calendar
order) even when a month or weekday is absent from the loaded files.
"""

from enum import IntEnum
from typing import List, Type

import numpy as np
import pandas as pd


class Month(IntEnum):
    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12

    @property
    def label(self) -> str:
        return self.name.capitalize()


class DayOfWeek(IntEnum):
    """BTS weekday codes (1 = Monday ... 7 = Sunday)."""

    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6
    SUN = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()


def enum_labels(enum_cls: Type[IntEnum]) -> List[str]:
    """Labels of an enumerated type in code order."""
    return [member.label for member in sorted(enum_cls)]


def to_categorical(values: pd.Series, enum_cls: Type[IntEnum]) -> pd.Series:
    """
    Convert integer codes to a categorical with the enum's full label set

    Args:
        values: Integer codes (or labels, if already converted)
        enum_cls: Month or DayOfWeek

    Returns:
        Ordered categorical Series with the same index

    Raises:
        ValueError: If a code or label is not part of the enum
    """
    labels = enum_labels(enum_cls)
    dtype = pd.CategoricalDtype(categories=labels, ordered=True)

    if isinstance(values.dtype, pd.CategoricalDtype):
        unknown = set(values.dropna().astype(str)) - set(labels)
        if unknown:
            raise ValueError(
                f"Unknown {enum_cls.__name__} labels: {sorted(unknown)}"
            )
        return values.astype(str).where(values.notna()).astype(dtype)

    code_to_label = {member.value: member.label for member in enum_cls}
    codes = pd.to_numeric(values, errors="raise")

    present = codes.dropna()
    unknown = set(present.astype(np.int64)) - set(code_to_label)
    if unknown or not np.all(present == np.floor(present)):
        raise ValueError(
            f"Invalid {enum_cls.__name__} codes: {sorted(set(present) - set(code_to_label))}"
        )

    mapped = codes.map(lambda code: code_to_label.get(int(code)) if pd.notna(code) else None)
    return pd.Series(pd.Categorical(mapped, dtype=dtype), index=values.index, name=values.name)
