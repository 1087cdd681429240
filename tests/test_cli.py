import pytest

from wordle_solver import cli


@pytest.fixture
def files(tmp_path):
    words = tmp_path / "words.txt"
    words.write_text("apple\ngrape\nmango\n")
    freq = tmp_path / "freq.csv"
    freq.write_text("word,count\napple,10\ngrape,5\nmango,1\n")
    return ["--words", str(words), "--frequencies", str(freq)]


def feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_assist_reprompts_on_bad_codes(files, monkeypatch, capsys):
    feed(monkeypatch, ["xyz", "gyqbb", "ybbbb", "ggggg"])
    assert cli.main(files + ["assist"]) == 0
    out = capsys.readouterr().out
    assert "Try: APPLE (3 candidates)" in out
    assert "Try: MANGO (1 candidates)" in out
    assert "unknown character" in out
    assert "Solved!" in out


def test_assist_with_played_word(files, monkeypatch, capsys):
    feed(monkeypatch, ["mango bybbb", "ggggg"])
    assert cli.main(files + ["assist"]) == 0
    assert "Try: APPLE" in capsys.readouterr().out


def test_assist_exhausted(files, monkeypatch, capsys):
    feed(monkeypatch, ["ggggb"])
    assert cli.main(files + ["assist"]) == 1
    assert "No words fit" in capsys.readouterr().out


def test_end_of_input(files, monkeypatch):
    feed(monkeypatch, [])
    assert cli.main(files + ["assist"]) == 1


def test_play(files, monkeypatch, capsys):
    feed(monkeypatch, ["abc", "zzzzz", "apple", "grape", "mango"])
    assert cli.main(files + ["--emoji", "play", "--seed", "1", "--max-turns", "3"]) == 0
    out = capsys.readouterr().out
    assert "need exactly 5 letters" in out
    assert "not in word list" in out
    assert "Solved in" in out


def test_play_out_of_turns(files, monkeypatch, capsys):
    feed(monkeypatch, ["apple", "grape", "mango"])
    code = cli.main(files + ["play", "--seed", "3", "--max-turns", "1"])
    out = capsys.readouterr().out
    assert (code == 0) == ("Solved in 1!" in out)
    if code:
        assert "The word was" in out


def test_benchmark(files, capsys):
    assert cli.main(files + ["--ranking", "entropy", "benchmark", "--nwords", "2"]) == 0
    out = capsys.readouterr().out
    assert "BENCHMARK RESULTS" in out
    assert "Words tested: 2" in out


def test_bundled_word_list(capsys):
    assert cli.main(["benchmark", "--nwords", "20"]) == 0
    assert "Failures: 0" in capsys.readouterr().out
