import numpy as np

from beam_spots.debug import DebugImageWriter


def test_writer_stores_png(tmp_path, blank_page):
    writer = DebugImageWriter(tmp_path / "out")
    writer.save_image("page1.spot", blank_page)
    assert writer.written == {"page1.spot": tmp_path / "out" / "page1.spot.png"}
    assert not (tmp_path / "out" / "page1.spot.png.tmp").exists()


def test_writer_removes_temp_file_on_failure(tmp_path):
    # A directory in place of the target makes the final rename fail
    (tmp_path / "page1.spot.png").mkdir()
    writer = DebugImageWriter(tmp_path)
    writer.save_image("page1.spot", np.zeros((4, 4), dtype=np.uint8))
    assert writer.written == {}
    assert not (tmp_path / "page1.spot.png.tmp").exists()
