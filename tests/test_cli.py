import pytest

from neureset.cli import main
from neureset.eeg_site import NUM_EEG_SITES


def _site_lines(text):
    return [line for line in text.splitlines() if line.startswith("EEG site #")]


def test_runs_one_session(tmp_path, capsys):
    log = tmp_path / "session.txt"
    assert main(["--seed", "3", "--log-file", str(log)]) == 0
    out = capsys.readouterr().out
    assert out == log.read_text(encoding="utf-8")
    assert out.startswith("Session #1, At:")
    assert len(_site_lines(out)) == NUM_EEG_SITES


def test_same_seed_same_results(tmp_path, capsys):
    main(["--seed", "11", "--band", "beta", "--log-file", str(tmp_path / "a.txt")])
    first = capsys.readouterr().out
    main(["--seed", "11", "--band", "beta", "--log-file", str(tmp_path / "b.txt")])
    second = capsys.readouterr().out
    assert _site_lines(first) == _site_lines(second)


def test_rejects_unknown_band(tmp_path):
    with pytest.raises(SystemExit):
        main(["--band", "gamma", "--log-file", str(tmp_path / "x.txt")])