import numpy as np, cv2
import pytest
from hausmatch.cli import main

@pytest.fixture
def images(tmp_path):
    scene = np.full((120,160), 20, np.uint8)
    cv2.rectangle(scene, (60,40), (90,70), 220, -1)
    cv2.circle(scene, (120,90), 12, 150, -1)
    needle = scene[30:80, 50:100].copy()
    hp, np_ = tmp_path / "haystack.png", tmp_path / "needle.png"
    cv2.imwrite(str(hp), scene)
    cv2.imwrite(str(np_), needle)
    return str(np_), str(hp)

@pytest.mark.parametrize("argv", [[], ["needle.png"], ["a.png", "b.png", "c.png"]])
def test_wrong_arity_exits_with_one(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 1
    assert "usage" in capsys.readouterr().err

def test_unreadable_image(tmp_path, images, capsys):
    needle, _ = images
    missing = str(tmp_path / "missing.png")
    assert main([needle, missing, "--no-gui"]) == 1
    assert "Could not open" in capsys.readouterr().err

def test_headless_search_prints_match(tmp_path, images, capsys):
    needle, haystack = images
    out = tmp_path / "preview.png"
    assert main([needle, haystack, "--no-gui", "--out", str(out)]) == 0
    text = capsys.readouterr().out
    assert "found at (" in text
    assert out.exists()

def test_bad_sweep_reported(images, capsys):
    needle, haystack = images
    assert main([needle, haystack, "--no-gui", "--rotation", "10", "0", "5"]) == 1
    assert "error" in capsys.readouterr().err
