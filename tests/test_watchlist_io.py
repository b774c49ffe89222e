import pytest

import watchlist_io as wio
from movie_collection import InvalidArgument, Movie, MovieCollection, OutOfRange


def test_parse_duration_is_permissive():
    assert wio.parse_duration('1.50\n') == 1.5
    assert wio.parse_duration('2 hours') == 2.0
    assert wio.parse_duration('.75') == 0.75
    assert wio.parse_duration('abc') == 0.0
    assert wio.parse_duration('') == 0.0
    assert wio.parse_duration(None) == 0.0


def test_format_record():
    assert wio.format_record(Movie('Up', 'Animation', 1.6)) == 'Up\nAnimation\n1.60'


def test_save_then_load_roundtrip(tmp_path):
    watchlist = MovieCollection([
        Movie('Alien', 'Sci-Fi', 1.954),
        Movie('Up', 'Animation', 1.6),
        Movie('Heat', 'Crime', 2.8333),
    ])
    path = tmp_path / 'watchlist.txt'
    assert wio.save_collection(str(path), watchlist)
    assert wio.get_last_save_error() is None

    assert path.read_text(encoding='utf-8') == 'Alien\nSci-Fi\n1.95\nUp\nAnimation\n1.60\nHeat\nCrime\n2.83'

    loaded = wio.load_collection(str(path))
    assert [(m.title, m.genre, m.duration) for m in loaded] == [
        ('Alien', 'Sci-Fi', 1.95), ('Up', 'Animation', 1.6), ('Heat', 'Crime', 2.83)]
    assert not (tmp_path / 'watchlist.txt.tmp').exists()


def test_load_tolerates_trailing_blank_line(tmp_path):
    path = tmp_path / 'library.txt'
    path.write_text('Alien\nSci-Fi\n1.95\nUp\nAnimation\n1.60\n\n', encoding='utf-8')
    loaded = wio.load_collection(str(path))
    assert loaded.titles() == ['Alien', 'Up']


def test_load_malformed_duration_is_zero(tmp_path):
    path = tmp_path / 'library.txt'
    path.write_text('Alien\nSci-Fi\nlong\nUp\nAnimation', encoding='utf-8')
    loaded = wio.load_collection(str(path))
    assert [m.duration for m in loaded] == [0.0, 0.0]


def test_load_rejects_long_title(tmp_path):
    path = tmp_path / 'library.txt'
    path.write_text('T' * 35 + '\nSci-Fi\n1.00\n', encoding='utf-8')
    with pytest.raises(OutOfRange):
        wio.load_collection(str(path))


def test_load_rejects_record_without_genre(tmp_path):
    path = tmp_path / 'library.txt'
    path.write_text('Alien\nSci-Fi\n1.00\nOrphan\n', encoding='utf-8')
    with pytest.raises(InvalidArgument):
        wio.load_collection(str(path))


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        wio.load_collection(str(tmp_path / 'missing.txt'))


def test_empty_collection_roundtrip(tmp_path):
    path = tmp_path / 'empty.txt'
    assert wio.save_collection(str(path), MovieCollection())
    assert path.read_text(encoding='utf-8') == ''
    assert len(wio.load_collection(str(path))) == 0


def test_save_failure_records_error(monkeypatch, tmp_path):
    def fake_replace(src, dst):
        raise OSError("disk full (simulated)")

    monkeypatch.setattr(wio.os, 'replace', fake_replace)
    target = tmp_path / 'out.txt'
    ok = wio.save_collection(str(target), MovieCollection([Movie('Up', 'Animation', 1.6)]))
    assert not ok
    err = wio.get_last_save_error()
    assert err is not None and 'simulated' in err
    assert not target.exists()
    assert not (tmp_path / 'out.txt.tmp').exists()


def test_parse_duration_overflow_is_zero():
    assert wio.parse_duration('1e999') == 0.0
    assert wio.parse_duration('-1e999') == 0.0


def test_overflowing_duration_roundtrip(tmp_path):
    path = tmp_path / 'library.txt'
    path.write_text('Big\nDrama\n1e999\n', encoding='utf-8')
    loaded = wio.load_collection(str(path))
    assert [m.duration for m in loaded] == [0.0]
    assert wio.save_collection(str(path), loaded)
    assert [m.duration for m in wio.load_collection(str(path))] == [0.0]


def test_load_rejects_non_utf8_file(tmp_path):
    path = tmp_path / 'latin1.txt'
    path.write_bytes(b'Caf\xe9\nDrama\n1.00\n')
    with pytest.raises(InvalidArgument):
        wio.load_collection(str(path))
