import os.path
import subprocess
import sys
import unittest

# Checked with the settings in .flake8 at the repository root.
FLAKE8_TARGETS = ["lrtutor", "setup.py"]


def find_root():
    return os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    )


def run_tool(module, args, cwd):
    """Run a checker as `python -m module`, return (status, output)."""
    proc = subprocess.run(
        [sys.executable, "-m", module] + args,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        cwd=cwd,
    )
    return proc.returncode, proc.stdout.decode()


class TestCodeQuality(unittest.TestCase):
    def setUp(self):
        self.root = find_root()

    def test_package_layout(self):
        package = os.path.join(self.root, "lrtutor")
        self.assertTrue(os.path.exists(os.path.join(package, "py.typed")))
        self.assertTrue(
            os.path.isdir(os.path.join(package, "tests", "specs"))
        )

    def test_flake8(self):
        config = os.path.join(self.root, ".flake8")
        if not os.path.exists(config):
            raise unittest.SkipTest("no .flake8 next to the sources")

        try:
            import flake8  # NoQA
        except ImportError:
            raise unittest.SkipTest("flake8 module is missing")

        targets = [
            target
            for target in FLAKE8_TARGETS
            if os.path.exists(os.path.join(self.root, target))
        ]
        status, output = run_tool(
            "flake8", ["--config", config] + targets, self.root
        )
        if status != 0:
            raise AssertionError(
                "flake8 validation failed:\n{}".format(output)
            )

    def test_mypy(self):
        config = os.path.join(self.root, "pyproject.toml")
        if not os.path.exists(config):
            raise unittest.SkipTest("no pyproject.toml next to the sources")

        try:
            import mypy  # NoQA
        except ImportError:
            raise unittest.SkipTest("mypy module is missing")

        status, output = run_tool(
            "mypy", ["--config-file", config, "lrtutor"], self.root
        )
        if status != 0:
            raise AssertionError(f"mypy validation failed:\n{output}")


if __name__ == "__main__":
    unittest.main()
