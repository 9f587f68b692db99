from __future__ import annotations

import base64
import json
import tempfile
from pathlib import Path
import unittest

from contractgen import config
from contractgen.models import HardwareOption, init_db, reset_engine
from contractgen.pipeline.ingest import decode_data_url, load_records, load_signature
from contractgen.pipeline.run import run_batch
from contractgen.storage import list_documents, record_document, write_document


class IngestTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_json_object_and_list(self) -> None:
        single = self.root / "one.json"
        single.write_text(json.dumps({"legal_entity_name": "Acme"}), encoding="utf-8")
        many = self.root / "many.json"
        many.write_text(json.dumps([{"legal_entity_name": "A"}, {"legal_entity_name": "B"}]), encoding="utf-8")
        self.assertEqual(load_records(single)[0].legal_entity_name, "Acme")
        self.assertEqual([r.legal_entity_name for r in load_records(many)], ["A", "B"])

    def test_csv_splits_outlets(self) -> None:
        path = self.root / "records.csv"
        path.write_text(
            "legal_entity_name,covered_outlets,hardware_option,pilot_term_days\n"
            "Acme,Pool Bar | Lobby,daze_provided,60\n"
            "Beta,,,\n",
            encoding="utf-8",
        )
        records = load_records(path)
        self.assertEqual(records[0].covered_outlets, ["Pool Bar", "Lobby"])
        self.assertEqual(records[0].hardware_option, HardwareOption.DAZE_PROVIDED)
        self.assertEqual(records[0].pilot_term_days, 60)
        self.assertEqual(records[1].covered_outlets, [])
        self.assertIsNone(records[1].pilot_term_days)

    def test_bad_inputs(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_records(self.root / "missing.json")
        broken = self.root / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_records(broken)
        invalid = self.root / "invalid.json"
        invalid.write_text(json.dumps({"pilot_term_days": "sixty"}), encoding="utf-8")
        with self.assertRaises(ValueError):
            load_records(invalid)

    def test_signature_sources(self) -> None:
        payload = b"\x89PNG fake"
        url = "data:image/png;base64," + base64.b64encode(payload).decode("ascii")
        self.assertEqual(decode_data_url(url), payload)
        self.assertEqual(load_signature(url), payload)
        self.assertEqual(load_signature(payload), payload)
        self.assertIsNone(load_signature(None))
        path = self.root / "sig.png"
        path.write_bytes(payload)
        self.assertEqual(load_signature(path), payload)
        with self.assertRaises(ValueError):
            decode_data_url("image/png;base64,AAAA")
        with self.assertRaises(ValueError):
            decode_data_url("data:image/png;base64,@@@")


class PipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        config.set_out_dir(Path(self.temp_dir.name))
        reset_engine()

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_batch_writes_documents_and_rows(self) -> None:
        records = load_records(self._write_records([{"legal_entity_name": "Acme Hotels"}]))
        results = run_batch(records)
        self.assertEqual(results.failed, [])
        self.assertEqual(len(results.ready), 1)
        path = results.ready[0]
        self.assertTrue(path.exists())
        self.assertEqual(path.parent.name, "acme-hotels")
        self.assertEqual(path.name, "Daze_Pilot_Agreement_Acme_Hotels_DRAFT.pdf")

        rows = list_documents("acme-hotels")
        self.assertEqual(len(rows), 1)
        self.assertFalse(rows[0].signed)
        self.assertGreater(rows[0].page_count, 1)
        self.assertEqual(rows[0].path, "acme-hotels/Daze_Pilot_Agreement_Acme_Hotels_DRAFT.pdf")

    def test_record_document_stores_row(self) -> None:
        init_db()
        path = write_document("acme", "acme.pdf", b"%PDF-1.4 test", base_dir=config.OUT_DIR)
        row = record_document("PA-00000001", "Acme", "acme", path, False, 1)
        self.assertIsNotNone(row.id)
        self.assertIsNotNone(row.created_at)
        self.assertEqual([r.document_id for r in list_documents("acme")], ["PA-00000001"])

    def _write_records(self, rows) -> Path:
        path = Path(self.temp_dir.name) / "records.json"
        path.write_text(json.dumps(rows), encoding="utf-8")
        return path


if __name__ == "__main__":
    unittest.main()
