import json
import cv2

from feature_match.presentation.cli.main import main
from conftest import make_textured_image, shift_image


def prepare_inputs(tmp_path):
    reference = make_textured_image(seed=0)
    ref_path = tmp_path / "reference.png"
    cv2.imwrite(str(ref_path), reference)

    inputs = tmp_path / "inputs"
    inputs.mkdir()
    for i in range(2):
        cv2.imwrite(str(inputs / f"frame_{i}.png"), shift_image(reference, 5 * (i + 1), 3))
    return ref_path, inputs


def test_cli_writes_one_composite_per_input(tmp_path, capsys):
    ref_path, inputs = prepare_inputs(tmp_path)
    out_dir = tmp_path / "out"

    code = main([str(ref_path), str(inputs),
                 "--features", "orb", "sift",
                 "--matchers", "bf", "flann",
                 "--output-dir", str(out_dir)])

    assert code == 0
    written = sorted(p.name for p in out_dir.iterdir())
    assert written == ["match_0000.jpg", "match_0001.jpg"]
    composite = cv2.imread(str(out_dir / "match_0000.jpg"))
    assert composite.shape[0] == 2 * 360
    assert "orb/bf" in capsys.readouterr().out


def test_cli_uses_config_file(tmp_path, capsys):
    ref_path, inputs = prepare_inputs(tmp_path)
    config_path = tmp_path / "pipelines.json"
    config_path.write_text(json.dumps({
        "features": ["kaze"],
        "matchers": ["flann"],
        "accept_ratio": 0.5,
        "max_height": 200
    }), encoding="utf-8")

    code = main([str(ref_path), str(inputs), "--config", str(config_path),
                 "--accept-delta", "0.2", "--output-dir", str(tmp_path / "out")])

    assert code == 0
    composite = cv2.imread(str(tmp_path / "out" / "match_0000.jpg"))
    assert composite.shape[0] == 200
    assert "accept ratio 0.70" in capsys.readouterr().out


def test_cli_reports_unknown_algorithm(tmp_path, capsys):
    ref_path, inputs = prepare_inputs(tmp_path)
    code = main([str(ref_path), str(inputs), "--features", "harris", "--output-dir", str(tmp_path / "out")])
    assert code == 2
    assert "harris" in capsys.readouterr().out


def test_cli_missing_reference(tmp_path):
    _, inputs = prepare_inputs(tmp_path)
    code = main([str(tmp_path / "missing.png"), str(inputs), "--output-dir", str(tmp_path / "out")])
    assert code == 2


def test_cli_accept_steps_use_config_ratio_step(tmp_path, capsys):
    ref_path, inputs = prepare_inputs(tmp_path)
    config_path = tmp_path / "pipelines.json"
    config_path.write_text(json.dumps({
        "features": ["orb"],
        "matchers": ["bf"],
        "accept_ratio": 0.5,
        "ratio_step": 0.1
    }), encoding="utf-8")

    code = main([str(ref_path), str(inputs), "--config", str(config_path),
                 "--accept-steps", "-2", "--output-dir", str(tmp_path / "out")])

    assert code == 0
    assert "accept ratio 0.30" in capsys.readouterr().out


def test_cli_reports_unwritable_output(tmp_path, capsys):
    ref_path, inputs = prepare_inputs(tmp_path)
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file in the way")

    code = main([str(ref_path), str(inputs), "--output-dir", str(blocker)])

    assert code == 2
    assert "❌" in capsys.readouterr().out
