"""
CLI and logging tests
"""

import json
import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """main() installs a handler on captured stderr; drop it after each test"""
    yield
    logger = logging.getLogger("flash_window")
    for handler in list(logger.handlers):
        if getattr(handler, "_flash_window", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestCLI:
    """python -m flash_window"""

    def test_list(self, capsys):
        from flash_window.__main__ import main

        assert main(["list"]) == 0
        out = capsys.readouterr().out
        for key in ("Ti", "Ni", "Cu", "Al", "Fe", "W", "Pt", "Re"):
            assert key in out

    def test_run_json(self, capsys):
        from flash_window.__main__ import main

        assert main(["run", "Ti", "--foil", "100", "6", "--ramp", "500", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["J_loc"] == pytest.approx(68.0)
        assert data["outcome"] == "FLASH -> LOC"

    def test_run_json_infinite_tau(self, capsys):
        """h=0 leaves no cooling, so tau is infinite; the output stays strict JSON"""
        from flash_window.__main__ import main

        def reject(token):
            raise ValueError(f"non-standard JSON constant {token}")

        assert main(["run", "Ti", "--h", "0", "--json"]) == 0
        data = json.loads(capsys.readouterr().out, parse_constant=reject)
        assert data["tau"] is None
        assert data["material"] == "Ti"

    def test_run_summary_gas(self, capsys):
        from flash_window.__main__ import main

        assert main(["run", "W", "--wire", "250", "--gas", "helium", "--pressure", "10"]) == 0
        out = capsys.readouterr().out
        assert "helium @ 10 torr" in out
        assert "E_flash" in out

    def test_run_tube(self, capsys):
        from flash_window.__main__ import main

        assert main(["run", "Ni", "--tube", "1.0", "50", "--gauge", "30", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["geometry"] == "ID1mm x 50um wall tube, L=30mm"

    def test_unknown_material(self, capsys):
        from flash_window.__main__ import main

        assert main(["run", "Xx"]) == 1
        assert "Error: Unknown material" in capsys.readouterr().err

    def test_compare(self, capsys):
        from flash_window.__main__ import main

        assert main(["compare", "--foil", "100", "6"]) == 0
        out = capsys.readouterr().out
        assert "E_flash" in out
        assert "FLASH -> LOC" in out

    def test_compare_json_threaded(self, capsys):
        from flash_window.__main__ import main

        assert main(["compare", "--executor", "thread", "--json"]) == 0
        rows = json.loads(capsys.readouterr().out)
        assert len(rows) == 8

    def test_experiments(self, capsys):
        from flash_window.__main__ import main

        assert main(["experiments"]) == 0
        out = capsys.readouterr().out
        assert "Ti R12" in out
        assert "Al R4" in out

    def test_curve(self, tmp_path, capsys):
        pytest.importorskip("matplotlib")
        from flash_window.__main__ import main

        out = tmp_path / "ej.png"
        assert main(["curve", "--metals", "Ti", "Ni", "--out", str(out)]) == 0
        assert out.exists()
        assert "Saved" in capsys.readouterr().out

    def test_constants_override(self, tmp_path, capsys):
        from flash_window.__main__ import main
        from flash_window.config import DEFAULT_CONSTANTS

        path = tmp_path / "constants.json"
        DEFAULT_CONSTANTS.replace(default_overshoot=3.0).save_json(path)
        assert main(["--constants", str(path), "run", "Fe", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["J_loc"] == pytest.approx(data["J_ss"] * 3.0)

    def test_materials_override(self, tmp_path, capsys):
        from flash_window.__main__ import main
        from flash_window.material import MaterialDatabase, get_material

        path = tmp_path / "materials.json"
        MaterialDatabase({"Ti": get_material("Ti")}).save_json(path)
        assert main(["--materials", str(path), "list"]) == 0
        out = capsys.readouterr().out
        assert "Materials (1)" in out


class TestLogging:
    """log.py"""

    def test_single_handler(self):
        from flash_window.log import PACKAGE_LOGGER, configure_logging

        configure_logging(logging.DEBUG)
        configure_logging(logging.WARNING)
        logger = logging.getLogger(PACKAGE_LOGGER)
        ours = [h for h in logger.handlers if getattr(h, "_flash_window", False)]
        assert len(ours) == 1
        assert logger.level == logging.WARNING

    def test_debug_records_fallbacks(self, caplog):
        from flash_window.geometry import Foil
        from flash_window.process_window import evaluate

        with caplog.at_level(logging.DEBUG, logger="flash_window"):
            evaluate("Fe", Foil(100, 6))
            evaluate("Cu", Foil(100, 6))
        assert "default overshoot" in caplog.text
        assert "no flash" in caplog.text

    def test_verbose_flag(self, capsys):
        from flash_window.__main__ import main

        assert main(["-v", "run", "Re", "--json"]) == 0
        assert "default overshoot" in capsys.readouterr().err
