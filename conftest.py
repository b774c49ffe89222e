import builtins

import pytest


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with scripted answers; EOFError once they run out."""
    def _feed(*answers):
        remaining = list(answers)

        def fake_input(prompt=''):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr(builtins, 'input', fake_input)
    return _feed


@pytest.fixture
def library_file(tmp_path):
    p = tmp_path / 'library.txt'
    p.write_text('Alien\nSci-Fi\n1.95\nUp\nAnimation\n1.60\nInception\nSci-Fi\n2.47\n', encoding='utf-8')
    return p
