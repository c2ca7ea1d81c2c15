from __future__ import annotations

import json
import sys
import types

import pytest

from manual_sorter.cli import main, parse_args
from manual_sorter.demo import check_examples, render_examples
from manual_sorter.demo import main as demo_main


@pytest.fixture
def no_tqdm(monkeypatch):
    tqdm_stub = types.SimpleNamespace(tqdm=lambda iterable, **kwargs: iterable)
    monkeypatch.setitem(sys.modules, "tqdm", tqdm_stub)


def test_parse_args_defaults(tmp_path):
    args = parse_args([str(tmp_path)])
    assert args.source_dir == tmp_path
    assert args.target_dir is None
    assert args.dry_run is False
    assert args.report is None


def test_parse_args_target_and_flags(tmp_path):
    args = parse_args(["--dry-run", str(tmp_path / "in"), str(tmp_path / "out"), "-v"])
    assert args.dry_run is True
    assert args.verbose is True
    assert args.target_dir == tmp_path / "out"


def test_parse_args_requires_source():
    with pytest.raises(SystemExit) as exc:
        parse_args([])
    assert exc.value.code != 0


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--help"])
    assert exc.value.code == 0
    out = " ".join(capsys.readouterr().out.split())
    assert "--dry-run" in out
    assert "already sit in their target folder" in out


def test_report_records_already_sorted_reason(manual_library, tmp_path, no_tqdm):
    main([str(manual_library), "--no-progress"])
    report = tmp_path / "second.json"

    main([str(manual_library), "--no-progress", "--report", str(report)])

    data = json.loads(report.read_text(encoding="utf-8"))
    by_file = {entry["filename"]: entry for entry in data["files"]}
    assert by_file["Honda_CBR600RR_Service.pdf"]["status"] == "skipped"
    assert by_file["Honda_CBR600RR_Service.pdf"]["reason"] == "already in its target folder"


def test_main_missing_source_exits_nonzero(tmp_path, no_tqdm):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "does-not-exist")])
    assert exc.value.code == 1


def test_main_sorts_into_target(manual_library, tmp_path, no_tqdm):
    target = tmp_path / "sorted"
    report = tmp_path / "report.json"

    main([str(manual_library), str(target), "--report", str(report)])

    folder = target / "Honda_CBR600RR_2003-2006_workshop_manual"
    assert (folder / "Honda_CBR600RR_Service.pdf").exists()
    assert (folder / "Honda_CBR600RR_Service.json").exists()
    assert (manual_library / "Orphan.pdf").exists()

    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["stats"] == {"processed": 5, "moved": 2, "skipped": 2, "errors": 1}
    assert data["dry_run"] is False


def test_main_dry_run_leaves_files_in_place(manual_library, tmp_path, no_tqdm):
    before = sorted(p.relative_to(manual_library) for p in manual_library.rglob("*"))
    reports = tmp_path / "reports"
    reports.mkdir()

    main(["--dry-run", str(manual_library), "--report", str(reports)])

    after = sorted(p.relative_to(manual_library) for p in manual_library.rglob("*"))
    assert before == after

    data = json.loads((reports / "sort_report.json").read_text(encoding="utf-8"))
    assert data["dry_run"] is True
    assert data["stats"]["moved"] == 0
    planned = [entry for entry in data["files"] if entry["status"] == "planned"]
    assert len(planned) == 2


def test_main_fatal_error_exits_nonzero(manual_library, monkeypatch, no_tqdm):
    def _boom(*args, **kwargs):
        raise RuntimeError("disk vanished")

    monkeypatch.setattr("manual_sorter.sorter.sort_single_pdf", _boom)

    with pytest.raises(SystemExit) as exc:
        main([str(manual_library)])
    assert exc.value.code == 1


def test_demo_examples_match_expected_folders():
    for filename, generated, expected in check_examples():
        assert generated == expected, filename


def test_demo_render_lists_every_folder():
    text = render_examples()
    assert "Honda_CBR600RR_2003-2006_workshop_manual/" in text
    assert "BMW_R1200GS_2013-2016/" in text
    assert "Kawasaki_Parts.json" in text


def test_demo_check_prints_matches(capsys):
    demo_main(["--check"])
    out = capsys.readouterr().out
    assert "Generated: Yamaha_YZF-R1_2009_owner_manual" in out
    assert "Match: NO" not in out
