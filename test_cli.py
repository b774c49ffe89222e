import pytest

import watchlist_app as app


def test_cli_requires_exactly_one_library(capsys):
    with pytest.raises(SystemExit) as exc:
        app.main([])
    assert exc.value.code == 2
    with pytest.raises(SystemExit) as exc:
        app.main(['a.txt', 'b.txt'])
    assert exc.value.code == 2


def test_cli_missing_library_is_fatal(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        app.main([str(tmp_path / 'missing.txt')])
    assert exc.value.code == 1
    assert 'Failed to load library' in capsys.readouterr().err


def test_cli_runs_session(library_file, feed_input, capsys):
    feed_input('9', '1', '4', '10')
    app.main([str(library_file), '--fuzzy-threshold', '80'])
    out = capsys.readouterr().out
    assert 'Alien (Sci-Fi, 1.95 hours)' in out
    assert 'Up (Animation, 1.60 hours)' in out
    assert 'Goodbye!' in out


def test_parse_args_defaults():
    args = app._parse_args(['lib.txt'])
    assert args.library == 'lib.txt'
    assert args.log_level == 'WARNING'
    assert args.fuzzy_threshold == 70


def test_cli_non_utf8_library_is_fatal(tmp_path, capsys):
    bad = tmp_path / 'latin1.txt'
    bad.write_bytes(b'Caf\xe9\nDrama\n1.00\n')
    with pytest.raises(SystemExit) as exc:
        app.main([str(bad)])
    assert exc.value.code == 1
    assert 'Failed to load library' in capsys.readouterr().err
