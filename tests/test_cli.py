import io
import sys

from huffpack import main


def test_roundtrip_default_sample(capsys, monkeypatch):
  monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b'')))
  assert main([]) == 0

  out = capsys.readouterr().out
  assert 'bytes:  8' in out
  assert 'bits:   22' in out
  assert 'packed: 3' in out


def test_roundtrip_argument(capsys):
  assert main(['roundtrip', 'aaaa']) == 0
  out = capsys.readouterr().out
  assert 'bits:   4' in out
  assert 'packed: 1' in out


def test_roundtrip_stdin(capsys, monkeypatch):
  monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b'hello world')))
  assert main(['roundtrip']) == 0
  assert 'bytes:  11' in capsys.readouterr().out


def test_table(capsys):
  assert main(['table', 'ab']) == 0
  out = capsys.readouterr().out
  assert ' 0x61  a          1  0' in out
  assert ' 0x62  b          1  1' in out


def test_table_orders_by_frequency(capsys):
  assert main(['table', 'abb']) == 0
  rows = capsys.readouterr().out.splitlines()[2:]
  assert rows[0].startswith(' 0x62')
  assert rows[1].startswith(' 0x61')


def test_multiple_words_are_joined(capsys):
  assert main(['table', 'a', 'a']) == 0
  out = capsys.readouterr().out
  assert ' 0x20  SP' in out


def test_roundtrip_empty_input_reports_error(capsys):
  assert main(['roundtrip', '']) == 1
  captured = capsys.readouterr()
  assert 'Error: cannot build a tree over zero symbols' in captured.err
  assert captured.out == ''


def test_table_empty_input_reports_error(capsys):
  assert main(['table', '']) == 1
  captured = capsys.readouterr()
  assert 'Error: cannot build a tree over zero symbols' in captured.err
  assert captured.out == ''
