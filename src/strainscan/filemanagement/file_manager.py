import logging
import os

import pandas as pd

from strainscan.model.faults import validate_fault_table

log = logging.getLogger("StrainScan")

# Extensions read as comma delimited and as whitespace delimited text
CSV_EXTENSIONS = (".csv",)
TEXT_EXTENSIONS = (".txt", ".dat", ".tsv")


class FileManager:
    """
    Handles file operations for fault tables: loading and validating catalogs, saving derived
    geometry tables, and applying an operation to every catalog in a folder.

    Parameters
    ----------
    base_dir : str, optional
        The directory where tables are loaded from and saved to. Default is './data'.
    """

    def __init__(self, base_dir="./data"):
        self.base_dir = base_dir

    def _resolve(self, filename):
        """Resolve a file name against the base directory unless it is already a path."""
        if os.path.isabs(filename) or os.path.exists(filename):
            return filename
        return os.path.join(self.base_dir, filename)

    def read_table(self, filename):
        """
        Read a delimited text table into a DataFrame.

        Comma separated files use the '.csv' extension; '.txt', '.dat' and '.tsv' files are split on
        whitespace.

        Parameters
        ----------
        filename : str
            File name relative to the base directory, or a path.

        Returns
        -------
        pd.DataFrame
            The table as read, without validation.
        """
        file_path = self._resolve(filename)
        ext = os.path.splitext(file_path)[1].lower()
        if ext in CSV_EXTENSIONS:
            table = pd.read_csv(file_path)
        elif ext in TEXT_EXTENSIONS:
            table = pd.read_csv(file_path, sep=r"\s+")
        else:
            raise ValueError(f"Unsupported table format '{ext}' for {file_path}.")
        # Spreadsheet exports often pad headers with spaces
        table.columns = [str(col).strip() for col in table.columns]
        return table

    def load_faults(self, filename, require_offset=False):
        """
        Load a fault catalog and check it against the input schema.

        Parameters
        ----------
        filename : str
            File name relative to the base directory, or a path.
        require_offset : bool, optional
            If True, every fault must carry an offset (the table including bounding faults).
            Default is False.

        Returns
        -------
        pd.DataFrame
            The validated fault table.
        """
        table = self.read_table(filename)
        faults = validate_fault_table(table, require_offset=require_offset)
        log.info(f"Loaded {len(faults)} faults from {self._resolve(filename)}")
        return faults

    def save_table(self, table, filename, save_dir=None):
        """
        Save a fault or derived geometry table as CSV.

        Parameters
        ----------
        table : pd.DataFrame
            The table to save.
        filename : str
            Name of the file, '.csv' is appended when missing.
        save_dir : str, optional
            Directory to save into. Default is the base directory.

        Returns
        -------
        str
            The path written.
        """
        save_dir = self.base_dir if save_dir is None else save_dir
        os.makedirs(save_dir, exist_ok=True)
        if not filename.endswith(".csv"):
            filename = filename + ".csv"
        file_path = os.path.join(save_dir, filename)
        table.to_csv(file_path, index=False)
        log.info(f"Table saved to {file_path}")
        return file_path

    def walk_and_process_tables(self, action_callback, *args, **kwargs):
        """
        Walk through the base directory and apply a callback to each table file.

        Files are visited in sorted order within each directory.

        Parameters
        ----------
        action_callback : callable
            The callback function to apply to each file path.
        """
        log.info(f"Processing tables in {self.base_dir}")
        for root, dirs, files in os.walk(self.base_dir):
            dirs.sort()
            file_list = [
                os.path.join(root, file)
                for file in sorted(files)
                if file.lower().endswith(CSV_EXTENSIONS + TEXT_EXTENSIONS)
            ]
            for file_path in file_list:
                action_callback(file_path, *args, **kwargs)

    def load_all_faults(self, require_offset=False):
        """
        Load every fault catalog below the base directory.

        Returns
        -------
        dict
            Validated fault tables keyed by the file name without extension.
        """
        tables = {}

        def _load(file_path):
            name = os.path.splitext(os.path.basename(file_path))[0]
            tables[name] = self.load_faults(file_path, require_offset=require_offset)

        self.walk_and_process_tables(_load)
        return tables
