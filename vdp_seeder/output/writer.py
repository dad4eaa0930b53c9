"""
Results file writer.
Writes `<vdp_url>|<label>` lines in one atomic step.
"""

import os
from pathlib import Path
from typing import List
import tempfile
import shutil

from ..models import VdpRecord
from ..utils import get_logger


class ResultWriter:
    """Writes VDP records to a single text file."""

    def __init__(self, output_file: str):
        self.output_file = Path(output_file)
        self.logger = get_logger()

    def write_records(self, records: List[VdpRecord]):
        """
        Write all records, replacing any previous file.

        Args:
            records: Records in input order
        """
        self.logger.info(f"Writing {len(records)} VDP URL(s) to {self.output_file}")

        content = "\n".join(record.to_line() for record in records)

        try:
            self.output_file.parent.mkdir(parents=True, exist_ok=True)
            self._atomic_write(content)
        except Exception as e:
            self.logger.error(f"Error writing output file: {e}", exc_info=True)
            raise

    def _atomic_write(self, content: str):
        """
        Write content atomically using temp file + rename.
        Prevents a half-written file if the process is interrupted.
        """
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.output_file.parent,
            prefix='.tmp_',
            suffix='.txt'
        )

        try:
            with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
                f.write(content)

            shutil.move(temp_path, self.output_file)

        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

