import pytest

from soundsorter.app import Options, build_buttons, parse_options
from soundsorter.render import value_to_color
from soundsorter.settings import ARRAY_SIZE, STEP_DELAY


class TestOptions:
    def test_defaults(self):
        opts = parse_options([])
        assert opts.size == ARRAY_SIZE
        assert opts.step_delay == pytest.approx(STEP_DELAY)
        assert opts.seed is None
        assert not opts.verbose

    def test_overrides(self):
        opts = parse_options(["--size", "12", "--delay", "5", "--seed", "9", "--mute", "-v"])
        assert opts == Options(size=12, step_delay=0.005, seed=9, sound=False,
                               fps=opts.fps, verbose=True)

    @pytest.mark.parametrize("argv", [["--size", "-1"], ["--delay", "-2"], ["--fps", "0"]])
    def test_rejects_bad_values(self, argv):
        with pytest.raises(SystemExit):
            parse_options(argv)


class TestLayout:
    def test_one_button_per_algorithm_plus_reset(self):
        keys = [b.key for b in build_buttons()]
        assert keys == ["new", "bubble", "insertion", "selection", "heap", "quick", "merge"]

    def test_buttons_do_not_overlap(self):
        btns = build_buttons()
        for a, b in zip(btns, btns[1:]):
            assert a.rect.right <= b.rect.left


class TestColors:
    def test_endpoints(self):
        assert value_to_color(0.0) == (0, 0, 255)
        assert value_to_color(0.999)[0] == 255

    def test_clamped(self):
        assert value_to_color(-1.0) == value_to_color(0.0)
