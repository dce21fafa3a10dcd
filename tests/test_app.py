import pytest

from fluidblob import __version__
from fluidblob.app import _parse_args, main


def test_defaults_match_field_params():
    from fluidblob.engine import FieldParams

    args = _parse_args([])
    d = FieldParams()
    assert args.count == d.count
    assert args.speed == d.speed
    assert args.smoothness == d.smoothness
    assert args.radius == d.circle_radius
    assert args.blur == d.blur_radius
    assert args.shadow == d.shadow_radius


def test_list_palettes(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--list-palettes"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "default" in out
    assert "#1B0CEC" in out


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert __version__ in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [["--count", "-1"], ["--quality", "5"], ["--radius", "0"], ["--palette", "nope"]],
)
def test_invalid_arguments_exit_with_error(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 1
