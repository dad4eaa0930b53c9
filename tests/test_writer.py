"""
Tests for the results file writer.
"""

from vdp_seeder.models import VdpRecord
from vdp_seeder.output import ResultWriter


class TestResultWriter:
    """Test output format and atomic replacement."""

    def test_lines_in_order(self, tmp_path):
        """Test `<vdp_url>|<label>` lines joined by newlines."""
        path = tmp_path / "out" / "vdp.txt"

        ResultWriter(str(path)).write_records([
            VdpRecord(vdp_url="https://a.example.com/vdp/1", label="A"),
            VdpRecord(vdp_url="https://b.example.com/vdp/2", label="UNK"),
        ])

        assert path.read_text(encoding="utf-8") == (
            "https://a.example.com/vdp/1|A\n"
            "https://b.example.com/vdp/2|UNK"
        )

    def test_replaces_existing_file(self, tmp_path):
        path = tmp_path / "vdp.txt"
        path.write_text("stale|X\nstale|Y", encoding="utf-8")

        ResultWriter(str(path)).write_records([VdpRecord(vdp_url="https://a.example.com/1", label="A")])

        assert path.read_text(encoding="utf-8") == "https://a.example.com/1|A"

    def test_no_temp_files_left(self, tmp_path):
        writer = ResultWriter(str(tmp_path / "vdp.txt"))
        writer.write_records([VdpRecord(vdp_url="https://a.example.com/1", label="A")])

        assert [p.name for p in tmp_path.iterdir()] == ["vdp.txt"]

