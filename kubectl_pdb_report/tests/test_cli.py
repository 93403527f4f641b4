import os
import subprocess

import pytest

from kubectl_pdb_report import fetcher
from kubectl_pdb_report.cli import DEFAULT_CSV_PATH, main

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")

EXPECTED_TSV = (
    "POD_NAME\tNAMESPACE\tREPLICASET\tPRIORITY_CLASS\tPRIORITY_VALUE\t"
    "PDB_NAME\tMIN_AVAILABLE\tMAX_UNAVAILABLE\n"
    "api-7f\tprod\tapi-7f8d\thigh\t1000000\tapi-pdb\t2\tN/A\n"
    "worker-0\tprod\tN/A\tmissing-class\tN/A\tN/A\tN/A\tN/A\n"
    "debug\tprod\tN/A\tN/A\tN/A\tN/A\tN/A\tN/A\n"
    "api-9c\tstaging\tapi-9c1a\tlow\t100\tapi-pdb\tN/A\t0\n"
)


def fixture_args(pods="pods.json", pdbs="pdbs.json", prios="priorityclasses.json"):
    return [
        "--pods",
        os.path.join(FIXTURES_DIR, pods),
        "--pdbs",
        os.path.join(FIXTURES_DIR, pdbs),
        "--priorityclasses",
        os.path.join(FIXTURES_DIR, prios),
    ]


def test_offline_report(tmp_path, capsys):
    csv_path = tmp_path / "out.csv"
    code = main(fixture_args() + ["--csv", str(csv_path)])
    captured = capsys.readouterr()

    assert code == 0
    assert captured.out == EXPECTED_TSV
    assert captured.err.strip() == f"Wrote CSV to: {csv_path}"
    assert csv_path.read_text(encoding="utf-8") == EXPECTED_TSV.replace("\t", ",")


def test_custom_csv_path_skips_default(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "elsewhere" / "out.csv"
    target.parent.mkdir()

    assert main(fixture_args() + ["--csv", str(target)]) == 0
    assert target.exists()
    assert not (tmp_path / DEFAULT_CSV_PATH).exists()


def test_default_csv_path(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(fixture_args()) == 0
    assert (tmp_path / DEFAULT_CSV_PATH).exists()
    assert "Wrote CSV to: pod-disruptions.csv" in capsys.readouterr().err


def test_empty_cluster_is_header_only(tmp_path, capsys):
    csv_path = tmp_path / "out.csv"
    args = fixture_args("empty.json", "empty.json", "empty.json")
    assert main(args + ["--csv", str(csv_path)]) == 0

    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert out.startswith("POD_NAME\t")
    assert csv_path.read_text(encoding="utf-8").count("\n") == 1


def test_runs_are_byte_identical(tmp_path, capsys):
    first, second = tmp_path / "a.csv", tmp_path / "b.csv"
    main(fixture_args() + ["--csv", str(first)])
    out_first = capsys.readouterr().out
    main(fixture_args() + ["--csv", str(second)])
    out_second = capsys.readouterr().out

    assert out_first == out_second
    assert first.read_bytes() == second.read_bytes()


def test_yaml_snapshot_input(tmp_path, capsys):
    csv_path = tmp_path / "out.csv"
    args = fixture_args(prios="priorityclasses.yaml")
    assert main(args + ["--csv", str(csv_path)]) == 0
    assert capsys.readouterr().out == EXPECTED_TSV


@pytest.mark.parametrize(
    "argv",
    [
        ["--bogus"],
        ["positional"],
        ["--csv"],
        ["--pods", "pods.json"],
        ["--cs", "x.csv"],
        ["--format", "json"],
    ],
)
def test_invalid_arguments_exit_2(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_missing_kubectl_exit_1(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("KUBECTL", raising=False)
    monkeypatch.setattr(fetcher.shutil, "which", lambda _: None)
    csv_path = tmp_path / "out.csv"

    assert main(["--csv", str(csv_path)]) == 1
    captured = capsys.readouterr()
    assert "Error: kubectl command could not be found" in captured.err
    assert captured.out == ""
    assert not csv_path.exists()


def test_unreadable_snapshot_exit_1(tmp_path, capsys):
    csv_path = tmp_path / "out.csv"
    args = fixture_args(pods="does-not-exist.json")
    assert main(args + ["--csv", str(csv_path)]) == 1
    assert capsys.readouterr().out == ""
    assert not csv_path.exists()


def test_unwritable_csv_exit_1(tmp_path, capsys):
    csv_path = tmp_path / "no-such-dir" / "out.csv"
    assert main(fixture_args() + ["--csv", str(csv_path)]) == 1
    assert "Error: cannot write CSV" in capsys.readouterr().err


def test_failed_query_returns_kubectl_status(tmp_path, monkeypatch, capsys):
    def refused(cmd, **kwargs):
        return subprocess.CompletedProcess(
            cmd, 3, stdout="", stderr="error: You must be logged in to the server"
        )

    monkeypatch.delenv("KUBECTL", raising=False)
    monkeypatch.setattr(fetcher.shutil, "which", lambda b: f"/usr/bin/{b}")
    monkeypatch.setattr(fetcher.subprocess, "run", refused)
    csv_path = tmp_path / "out.csv"

    assert main(["--csv", str(csv_path)]) == 3
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "must be logged in" in captured.err
    assert not csv_path.exists()
