"""Stock history maintenance: merge, split detection, import and export. 📈"""

from cotalake.history.export import history_to_csv, history_to_dataframe
from cotalake.history.importer import (
    ImportSummary,
    StockUpdate,
    import_bovespa_file,
    update_stock_history,
)
from cotalake.history.merge import merge_daily_quotes
from cotalake.history.splits import find_last_xplit, is_xplit_marker

__all__ = [
    # Merge 🔀
    "merge_daily_quotes",
    # Splits ✂️
    "find_last_xplit",
    "is_xplit_marker",
    # Import 📥
    "ImportSummary",
    "StockUpdate",
    "import_bovespa_file",
    "update_stock_history",
    # Export 📤
    "history_to_dataframe",
    "history_to_csv",
]
