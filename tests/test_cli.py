import json
from pathlib import Path

import pytest

from luxldt.cli import main
from luxldt.parser.ldt_parser import load_ldt
from luxldt.parser.ldt_writer import format_ldt


def test_cli_demo_writes_valid_ldt(tmp_path: Path, capsys):
    out = tmp_path / "demo.ldt"
    assert main(["demo", "--out", str(out)]) == 0
    assert "Saved demo LDT" in capsys.readouterr().out

    res = load_ldt(out)
    assert res.ok
    assert res.warning is None
    rec = res.unwrap()
    assert rec.symmetry_code == 1
    assert len(rec.angles_c) == 4
    assert rec.intensities == [300.0, 200.0, 0.0]
    # nothing left over after the intensity block
    assert out.read_text(encoding="utf-8") == format_ldt(rec, precision=6)


def test_cli_info_json(tmp_path: Path, capsys, ldt_text):
    p = tmp_path / "fixture.ldt"
    p.write_text(ldt_text(symmetry=4, mc=24, ng=5), encoding="utf-8")

    assert main(["info", str(p), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["symmetry_code"] == 4
    assert payload["stored_planes"]["count"] == 7
    assert payload["counts"]["num_intensities"] == 35


def test_cli_info_text(tmp_path: Path, capsys, ldt_text):
    p = tmp_path / "fixture.ldt"
    p.write_text(ldt_text(mc=4, ng=3), encoding="utf-8")
    assert main(["info", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Acme Downlight" in out
    assert "C-planes: 4" in out


def test_cli_info_missing_file(tmp_path: Path, capsys):
    assert main(["info", str(tmp_path / "missing.ldt")]) == 2
    assert "[ERROR] File not found" in capsys.readouterr().out


def test_cli_info_invalid_symmetry(tmp_path: Path, capsys, ldt_lines):
    lines = ldt_lines(mc=4, ng=3)
    lines[2] = "5"
    p = tmp_path / "bad.ldt"
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    assert main(["info", str(p)]) == 3
    assert "symmetry" in capsys.readouterr().out.lower()


def test_cli_rewrite(tmp_path: Path, capsys, ldt_lines):
    lines = ldt_lines(mc=4, ng=3)
    lines[4] = "90,0"
    src = tmp_path / "in.ldt"
    src.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    dst = tmp_path / "out.ldt"

    assert main(["rewrite", str(src), str(dst), "--precision", "6"]) == 0
    assert "Saved" in capsys.readouterr().out
    text = dst.read_bytes().decode("utf-8")
    assert "\r" not in text
    assert text.splitlines()[4] == "90"
    assert load_ldt(dst).record == load_ldt(src).record


def test_cli_rewrite_reports_warning(tmp_path: Path, capsys, ldt_lines):
    lines = ldt_lines(mc=4, ng=3)
    lines[13] = "wide"
    src = tmp_path / "in.ldt"
    src.write_text("\n".join(lines) + "\n", encoding="utf-8")
    assert main(["rewrite", str(src), str(tmp_path / "out.ldt")]) == 0
    assert "[WARN]" in capsys.readouterr().out


def test_cli_rewrite_unwritable(tmp_path: Path, capsys, ldt_text):
    src = tmp_path / "in.ldt"
    src.write_text(ldt_text(mc=4, ng=3), encoding="utf-8")
    assert main(["rewrite", str(src), str(tmp_path)]) == 4
    assert "Failed writing file" in capsys.readouterr().out


def test_cli_view_saves_plots(tmp_path: Path, capsys, ldt_text):
    src = tmp_path / "in.ldt"
    src.write_text(ldt_text(symmetry=2, mc=24, ng=19), encoding="utf-8")
    outdir = tmp_path / "plots"

    assert main(["view", str(src), "--out", str(outdir), "--stem", "acme"]) == 0
    assert (outdir / "acme_intensity.png").exists()
    assert (outdir / "acme_polar.png").exists()


def test_cli_view_without_c_angles(tmp_path: Path, capsys, ldt_text):
    src = tmp_path / "in.ldt"
    src.write_text(ldt_text(symmetry=1, mc=0, ng=3), encoding="utf-8")
    outdir = tmp_path / "plots"

    assert main(["view", str(src), "--out", str(outdir), "--stem", "rot"]) == 0
    assert "Cannot plot" not in capsys.readouterr().out
    assert (outdir / "rot_polar.png").exists()


def test_cli_rejects_unknown_encoding(tmp_path: Path, ldt_text):
    src = tmp_path / "in.ldt"
    src.write_text(ldt_text(mc=4, ng=3), encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["info", str(src), "--encoding", "no-such-codec"])
    assert exc.value.code == 2
