import json
import tempfile
import unittest
from pathlib import Path

from darknet_task.config import InferenceConfig, read_execution_config, try_parse


def _payload(**overrides) -> dict:
    payload = {
        "input_path": "input/dog.jpg",
        "model_config_path": "model/yolov3.cfg",
        "model_weights_path": "model/yolov3.weights",
        "labels_path": "model/coco.names",
        "output_path": "output/result.txt",
        "objectness_threshold": 0.25,
        "class_threshold": 0.5,
        "hierarchical_threshold": 0.5,
        "iou_threshold": 0.45,
        "letterbox": True,
    }
    payload.update(overrides)
    return payload


def _encode(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


class TestTryParse(unittest.TestCase):
    def test_parse_ok(self) -> None:
        cfg = try_parse(_encode(_payload()))
        self.assertIsInstance(cfg, InferenceConfig)
        self.assertEqual(cfg.input_path, "input/dog.jpg")
        self.assertEqual(cfg.objectness_threshold, 0.25)
        self.assertEqual(cfg.iou_threshold, 0.45)
        self.assertTrue(cfg.letterbox)

    def test_integer_thresholds_become_floats(self) -> None:
        cfg = try_parse(_encode(_payload(class_threshold=0, iou_threshold=1)))
        self.assertIsInstance(cfg.class_threshold, float)
        self.assertEqual(cfg.iou_threshold, 1.0)

    def test_ranges_and_paths_not_validated(self) -> None:
        cfg = try_parse(_encode(_payload(class_threshold=7.5, input_path="../../nowhere")))
        self.assertIsNotNone(cfg)
        self.assertEqual(cfg.class_threshold, 7.5)

    def test_missing_key(self) -> None:
        payload = _payload()
        del payload["labels_path"]
        self.assertIsNone(try_parse(_encode(payload)))

    def test_unknown_key(self) -> None:
        self.assertIsNone(try_parse(_encode(_payload(extra=1))))

    def test_wrong_types(self) -> None:
        self.assertIsNone(try_parse(_encode(_payload(output_path=3))))
        self.assertIsNone(try_parse(_encode(_payload(class_threshold="0.5"))))
        self.assertIsNone(try_parse(_encode(_payload(class_threshold=True))))
        self.assertIsNone(try_parse(_encode(_payload(letterbox=1))))

    def test_not_json(self) -> None:
        self.assertIsNone(try_parse(b"\x00\x01garbage"))
        self.assertIsNone(try_parse(b"\xff\xfe"))
        self.assertIsNone(try_parse(b"[1, 2, 3]"))
        self.assertIsNone(try_parse(b""))

    def test_deeply_nested_json(self) -> None:
        self.assertIsNone(try_parse(b"[" * 100000 + b"]" * 100000))

    def test_threshold_too_large_for_float(self) -> None:
        self.assertIsNone(try_parse(_encode(_payload(class_threshold=10**400))))

    def test_frozen(self) -> None:
        cfg = try_parse(_encode(_payload()))
        with self.assertRaises(Exception):
            cfg.class_threshold = 0.1  # type: ignore[misc]

    def test_to_dict_round_trip(self) -> None:
        cfg = try_parse(_encode(_payload(letterbox=False)))
        self.assertEqual(try_parse(_encode(cfg.to_dict())), cfg)


class TestReadExecutionConfig(unittest.TestCase):
    def test_reads_bytes(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        path = Path(tmpdir.name) / "execution_config"
        path.write_bytes(_encode(_payload()))
        self.assertEqual(read_execution_config(path), _encode(_payload()))

    def test_missing_raises(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        with self.assertRaises(FileNotFoundError):
            read_execution_config(Path(tmpdir.name) / "execution_config")


if __name__ == "__main__":
    unittest.main()
