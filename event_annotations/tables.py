import numpy as np
import pandas as pd
import xarray as xr
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from .utils import equals_ignore_case, is_missing

DEFAULT_TABLE_ID = "events"

# ============================================================================
# Event Table Base Class
# ============================================================================

class EventTable(ABC):
    """
    Abstract tabular source of event records.

    A table exposes its column names, an ordered iteration over rows, and
    per-row cell access by column index. Any schema-agnostic source (a
    DataFrame, a Dataset, a list of records) can implement it.
    """

    table_id: str = DEFAULT_TABLE_ID

    @property
    @abstractmethod
    def column_names(self) -> List[str]:
        """Column names in table order."""
        pass

    @abstractmethod
    def rows(self) -> Iterator[Sequence[Any]]:
        """Iterate rows in table order; each row is indexable by column index."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def resolve_column(self, name: str) -> int:
        """
        Return the index of a column, matching the name case-insensitively.

        Raises:
            KeyError: If no column has the name
        """
        for index, column in enumerate(self.column_names):
            if equals_ignore_case(str(column), name):
                return index
        raise KeyError(f'Unable to find column "{name}" in table "{self.table_id}"')

    def cell(self, row: Sequence[Any], index: int) -> Any:
        """Return the typed value of a cell."""
        return row[index]

    def cell_string(self, row: Sequence[Any], index: int) -> str:
        """
        Return a cell rendered as a string; missing cells render as "".

        Whole-number floats render without a fraction ("8001", not "8001.0"),
        since pandas stores integer columns with gaps as float.
        """
        value = self.cell(row, index)
        if is_missing(value):
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, (float, np.floating)) and float(value).is_integer():
            return str(int(value))
        return str(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table_id={self.table_id!r}, rows={len(self)}, columns={self.column_names})"


# ============================================================================
# Concrete Tables
# ============================================================================

class DataFrameEventTable(EventTable):
    """Event table backed by a pandas DataFrame (one event per row)."""

    def __init__(self, df: pd.DataFrame, table_id: Optional[str] = None):
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"Expected a pandas DataFrame, got {type(df).__name__}")
        self.df = df
        self.table_id = table_id or df.attrs.get("table_id", DEFAULT_TABLE_ID)

    @property
    def column_names(self) -> List[str]:
        return [str(column) for column in self.df.columns]

    def rows(self) -> Iterator[Sequence[Any]]:
        return self.df.itertuples(index=False, name=None)

    def __len__(self) -> int:
        return len(self.df)


class DatasetEventTable(EventTable):
    """
    Event table backed by an xarray Dataset.

    Every data variable (and every coordinate) along the record dimension is
    a column; the dataset must be one-dimensional along that dimension.
    """

    def __init__(self, ds: xr.Dataset, dim: Optional[str] = None,
                 table_id: Optional[str] = None):
        if not isinstance(ds, xr.Dataset):
            raise TypeError(f"Expected an xarray Dataset, got {type(ds).__name__}")
        if dim is None:
            if len(ds.dims) != 1:
                raise ValueError(f"Cannot infer record dimension from dims {list(ds.dims)}; pass dim")
            dim = next(iter(ds.dims))
        if dim not in ds.dims:
            raise ValueError(f"Dimension '{dim}' not found in dataset")

        self.ds = ds
        self.dim = dim
        self.table_id = table_id or ds.attrs.get("table_id", DEFAULT_TABLE_ID)

        columns = [name for name, coord in ds.coords.items() if coord.dims == (dim,)]
        for name, var in ds.data_vars.items():
            if var.dims != (dim,):
                raise ValueError(f"Variable '{name}' must be one-dimensional along '{dim}', has dims {var.dims}")
            columns.append(name)
        self._columns = [str(name) for name in columns]
        self._values = [ds[name].values for name in columns]

    @property
    def column_names(self) -> List[str]:
        return list(self._columns)

    def rows(self) -> Iterator[Sequence[Any]]:
        return zip(*self._values)

    def __len__(self) -> int:
        return self.ds.sizes[self.dim]


class RecordEventTable(EventTable):
    """Event table backed by a sequence of mappings (column name -> value)."""

    def __init__(self, records: Sequence[Mapping[str, Any]],
                 columns: Optional[Sequence[str]] = None,
                 table_id: Optional[str] = None):
        self.records = list(records)
        if columns is None:
            # Union of record keys in first-seen order
            seen = {}
            for record in self.records:
                for key in record:
                    seen.setdefault(key, None)
            columns = list(seen)
        self._columns = [str(column) for column in columns]
        self.table_id = table_id or DEFAULT_TABLE_ID

    @property
    def column_names(self) -> List[str]:
        return list(self._columns)

    def rows(self) -> Iterator[Sequence[Any]]:
        for record in self.records:
            yield tuple(record.get(column) for column in self._columns)

    def __len__(self) -> int:
        return len(self.records)
