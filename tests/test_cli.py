"""
Tests for the billgen command line interface.
"""

import json

import pytest

from billgen.cli import create_parser, main

BILL_JSON = {
    "billCode": "TEST",
    "billName": "测试单",
    "module": "m",
    "packageName": "p",
    "billType": "single",
    "headFields": [{"name": "billno", "label": "单据号"}],
}


@pytest.fixture
def bill_file(tmp_path):
    path = tmp_path / "bill.json"
    path.write_text(json.dumps(BILL_JSON, ensure_ascii=False), encoding="utf-8")
    return path


class TestParser:
    """Test argument parsing."""

    def test_file_and_url_are_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["bill.json", "--url", "http://host/a.json"])

    def test_defaults(self):
        args = create_parser().parse_args(["bill.json"])

        assert args.file == "bill.json"
        assert args.output is None
        assert not args.write_back
        assert not args.json


class TestMain:
    """Test complete command runs."""

    def test_json_output(self, bill_file, tmp_path, capsys):
        out = tmp_path / "out"

        code = main([str(bill_file), "-o", str(out), "--json", "--date", "2026-02-10"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert data["stats"]["fileCount"] == 1
        assert data["outputDir"] == str(out)

        text = (out / "src/public/nc/vo/m/test/TESTHVO.java").read_text(encoding="gbk")
        assert "创建日期:2026-02-10" in text

    def test_summary_output(self, bill_file, tmp_path, capsys):
        code = main([str(bill_file), "-o", str(tmp_path / "out")])

        assert code == 0
        assert "Generation Summary" in capsys.readouterr().out

    def test_list_layers(self, capsys):
        assert main(["--list-layers"]) == 0
        assert "metadata" in capsys.readouterr().out

    def test_requires_input(self):
        assert main([]) == 1

    def test_incomplete_bill(self, tmp_path, capsys):
        path = tmp_path / "bill.json"
        path.write_text(json.dumps({"billCode": "TEST"}), encoding="utf-8")

        assert main([str(path), "-o", str(tmp_path / "out")]) == 1
        assert "Module is required" in capsys.readouterr().out
        assert not (tmp_path / "out").exists()

    def test_multi_bill_without_body_code(self, tmp_path, capsys):
        path = tmp_path / "bill.json"
        data = dict(BILL_JSON, billType="multi", bodyFields=[{"name": "crowno", "label": "行号"}])
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

        assert main([str(path), "-o", str(tmp_path / "out")]) == 1
        assert "Multi-body bills need a body code" in capsys.readouterr().out

    def test_skip_validation(self, tmp_path):
        path = tmp_path / "bill.json"
        data = dict(BILL_JSON, billName="")
        path.write_text(json.dumps(data), encoding="utf-8")

        assert main([str(path), "-o", str(tmp_path / "out"), "--skip-validation", "--json"]) == 0

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "absent.json")]) == 1

    def test_bad_date(self, bill_file, tmp_path):
        assert main([str(bill_file), "-o", str(tmp_path / "out"), "--date", "xyzzy-not-a-date"]) == 1

    def test_bad_encoding(self, bill_file, tmp_path):
        assert main([str(bill_file), "-o", str(tmp_path / "out"), "--encoding", "no-such-codec"]) == 1

    def test_write_back_saves_identifiers(self, tmp_path):
        path = tmp_path / "bill.json"
        data = dict(BILL_JSON, globalConfig={"generateMetadata": True})
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

        code = main([str(path), "-o", str(tmp_path / "out"), "--write-back", "--json"])

        assert code == 0
        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["globalConfig"]["componentId"]
        assert saved["headFields"][0]["id"]
        assert (tmp_path / "out" / "metadata" / "test.bmf").is_file()

    def test_output_dir_from_global_config(self, tmp_path):
        path = tmp_path / "bill.json"
        data = dict(BILL_JSON, globalConfig={"outputDir": str(tmp_path / "configured")})
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

        assert main([str(path), "--json"]) == 0
        assert (tmp_path / "configured" / "src").is_dir()
