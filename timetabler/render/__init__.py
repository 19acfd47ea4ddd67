from .csv_out import entries_csv, grid_csv, outcomes_text, write_csv_blocks

__all__ = ["grid_csv", "entries_csv", "outcomes_text", "write_csv_blocks"]
