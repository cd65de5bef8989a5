import os
import tempfile
import unittest
from pathlib import Path

from darknet_kit.errors import ResultFormatError
from darknet_kit.types import BBox, LabeledDetection
from darknet_task.reporting import (
    format_detection,
    format_detections,
    format_number,
    format_probability,
    write_result,
)


class TestFormatting(unittest.TestCase):
    def test_numbers_use_shortest_form(self) -> None:
        self.assertEqual(format_number(10.0), "10")
        self.assertEqual(format_number(0.0), "0")
        self.assertEqual(format_number(0.5), "0.5")
        self.assertEqual(format_number(0.1), "0.1")
        self.assertEqual(format_number(1e-7), "0.0000001")

    def test_probability_two_decimals(self) -> None:
        self.assertEqual(format_probability(0.9), "90.00%")
        self.assertEqual(format_probability(0.5), "50.00%")
        self.assertEqual(format_probability(1.0), "100.00%")
        self.assertEqual(format_probability(0.0), "0.00%")

    def test_line_layout(self) -> None:
        det = LabeledDetection(bbox=BBox(0.5, 0.25, 0.125, 1.0), probability=0.75, label="dog")
        self.assertEqual(format_detection(det), "dog\t75.00%\tx: 0.5\ty: 0.25\tw: 0.125\th: 1\n")

    def test_cat_scenario_text(self) -> None:
        dets = [
            LabeledDetection(bbox=BBox(0, 0, 10, 10), probability=0.9, label="cat"),
            LabeledDetection(bbox=BBox(1, 1, 1, 1), probability=0.9, label="cat"),
        ]
        self.assertEqual(
            format_detections(dets),
            "cat\t90.00%\tx: 0\ty: 0\tw: 10\th: 10\n"
            "cat\t90.00%\tx: 1\ty: 1\tw: 1\th: 1\n",
        )

    def test_empty(self) -> None:
        self.assertEqual(format_detections([]), "")

    def test_non_finite_rejected(self) -> None:
        det = LabeledDetection(bbox=BBox(float("nan"), 0, 1, 1), probability=0.5, label="x")
        with self.assertRaises(ResultFormatError):
            format_detection(det)

    def test_non_numeric_rejected(self) -> None:
        with self.assertRaises(ResultFormatError):
            format_number("wide")  # type: ignore[arg-type]
        with self.assertRaises(ResultFormatError):
            format_probability(None)  # type: ignore[arg-type]


class TestWriteResult(unittest.TestCase):
    def setUp(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.dir = Path(tmpdir.name)

    def test_writes_utf8_text(self) -> None:
        path = write_result("ñandú\t50.00%\n", self.dir / "result.txt")
        self.assertEqual(path.read_bytes(), "ñandú\t50.00%\n".encode("utf-8"))
        self.assertEqual(os.listdir(self.dir), ["result.txt"])

    @unittest.skipIf(os.name != "posix", "POSIX permission bits")
    def test_permissions_follow_umask(self) -> None:
        old_mask = os.umask(0o022)
        self.addCleanup(os.umask, old_mask)
        path = write_result("x\n", self.dir / "result.txt")
        self.assertEqual(path.stat().st_mode & 0o777, 0o644)

    def test_replaces_existing_file(self) -> None:
        target = self.dir / "result.txt"
        target.write_text("old", encoding="utf-8")
        write_result("new\n", target)
        self.assertEqual(target.read_text(encoding="utf-8"), "new\n")

    def test_empty_result_still_written(self) -> None:
        target = write_result("", self.dir / "result.txt")
        self.assertTrue(target.exists())
        self.assertEqual(target.read_bytes(), b"")

    def test_missing_directory_raises_and_leaves_nothing(self) -> None:
        with self.assertRaises(OSError):
            write_result("x\n", self.dir / "missing" / "result.txt")
        self.assertEqual(os.listdir(self.dir), [])


if __name__ == "__main__":
    unittest.main()
