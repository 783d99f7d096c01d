import pytest

from midixml2ringtone.cli import main

XML = """<MIDIFile>
  <TicksPerBeat>480</TicksPerBeat>
  <Track>
    <Event><Delta>0</Delta><NoteOn Note="60"/></Event>
    <Event><Delta>480</Delta><NoteOff Note="60"/></Event>
  </Track>
  <Track>
    <Event><Delta>0</Delta><NoteOn Note="200"/></Event>
  </Track>
</MIDIFile>
"""


@pytest.fixture
def files(tmp_path):
    src = tmp_path / "song.xml"
    src.write_text(XML, encoding="utf-8")
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("{}\n", encoding="utf-8")
    return tmp_path, str(src), str(cfg)


def test_prints_tokens_to_stdout(files, capsys) -> None:
    _, src, cfg = files
    main(["--in", src, "--config", cfg])
    captured = capsys.readouterr()
    assert captured.out.splitlines()[:3] == ["---track 1", "-----voice 1", "4c4"]
    assert "[cli] track 2: OutOfRangeNote" in captured.err


def test_writes_files(files) -> None:
    tmp_path, src, cfg = files
    main(["--in", src, "--config", cfg, "--out", str(tmp_path / "out.txt"),
          "--tracks-out-dir", str(tmp_path / "tracks")])
    assert (tmp_path / "out.txt").read_text(encoding="utf-8").startswith("---track 1")
    assert (tmp_path / "tracks" / "01-track.txt").read_text(encoding="utf-8") == "4c4\n"
    assert not (tmp_path / "tracks" / "02-track.txt").exists()


def test_missing_input(tmp_path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--in", str(tmp_path / "nope.xml")])
    assert exc.value.code == 1


def test_unreadable_input(tmp_path) -> None:
    src = tmp_path / "bad.xml"
    src.write_text("<MIDIFile>", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["--in", str(src)])
    assert exc.value.code == 2


def test_all_tracks_failed(tmp_path) -> None:
    src = tmp_path / "bad.xml"
    src.write_text(XML.replace('Note="60"', 'Note="1"'), encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["--in", str(src)])
    assert exc.value.code == 3
