from typing import Any, Optional

import pandas as pd
import xarray as xr

from .tables import EventTable, DataFrameEventTable, DatasetEventTable, RecordEventTable

def create_event_table(data: Any, table_id: Optional[str] = None) -> EventTable:
    """Wrap tabular data in the appropriate EventTable type."""
    if isinstance(data, EventTable):
        return data
    elif isinstance(data, pd.DataFrame):
        return DataFrameEventTable(data, table_id=table_id)
    elif isinstance(data, xr.Dataset):
        return DatasetEventTable(data, table_id=table_id)
    elif isinstance(data, (list, tuple)):
        return RecordEventTable(data, table_id=table_id)
    else:
        raise ValueError(f"Unsupported event table data: {type(data).__name__}")
