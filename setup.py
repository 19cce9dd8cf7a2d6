import os
import pathlib
import sys

from setuptools import extension as setuptools_ext
from setuptools import setup
from setuptools.command import build_ext as setuptools_build_ext


_ROOT = pathlib.Path(__file__).parent


with open(str(_ROOT / "README.rst")) as f:
    readme = f.read()


with open(str(_ROOT / "lrtutor" / "_version.py")) as f:
    for line in f:
        if line.startswith("__version__ ="):
            _, _, version = line.partition("=")
            VERSION = version.strip(" \n'\"")
            break
    else:
        raise RuntimeError(
            "unable to read the version from lrtutor/_version.py"
        )


USE_MYPYC = False
MYPY_DEPENDENCY = "mypy>=0.910"
setup_requires = []
ext_modules = []

if (
    os.environ.get("LRTUTOR_USE_MYPYC", None) in {"true", "1", "on"}
    or "--use-mypyc" in sys.argv
):
    setup_requires.append(MYPY_DEPENDENCY)
    # Fool setuptools into calling build_ext.  The actual list of
    # extensions would get replaced by mypycify.
    ext_modules.append(
        setuptools_ext.Extension("lrtutor.foo", ["lrtutor/foo.c"])
    )
    USE_MYPYC = True


class build_ext(setuptools_build_ext.build_ext):  # type: ignore
    def finalize_options(self) -> None:
        # finalize_options() may be called multiple times on the
        # same command object, so make sure not to override previously
        # set options.
        if getattr(self, "_initialized", False):
            return

        if USE_MYPYC:
            try:
                import mypy.version
                from mypyc.build import mypycify
            except ImportError:
                raise RuntimeError(
                    "please install {} to compile lrtutor from source".format(
                        MYPY_DEPENDENCY
                    )
                )

            min_version = tuple(
                int(part) for part in MYPY_DEPENDENCY.split(">=")[1].split(".")
            )
            mypy_version = tuple(
                int(part)
                for part in mypy.version.__version__.split("+")[0].split(".")
                if part.isdigit()
            )
            if mypy_version < min_version:
                raise RuntimeError(
                    "lrtutor requires {}, got mypy=={}".format(
                        MYPY_DEPENDENCY, mypy.version.__version__
                    )
                )

            self.distribution.ext_modules = mypycify(
                [
                    "lrtutor/grammar.py",
                    "lrtutor/automaton.py",
                    "lrtutor/table.py",
                ],
            )

        super(build_ext, self).finalize_options()


setup(
    name="lrtutor",
    version=VERSION,
    python_requires=">=3.8.0",
    license="MIT",
    description="Interactive LR(0)/LR(1) parsing tutor: BNF grammars, item "
    "set automata, action/goto tables and traced shift-reduce parsing.",
    long_description=readme,
    long_description_content_type="text/x-rst",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Education",
        "Topic :: Software Development :: Compilers",
    ],
    packages=["lrtutor", "lrtutor.tests", "lrtutor.tests.specs"],
    package_data={"lrtutor": ["py.typed"]},
    install_requires=["mypy_extensions>=0.4.3"],
    setup_requires=setup_requires,
    ext_modules=ext_modules,
    extras_require={
        "test": [
            "flake8",
            MYPY_DEPENDENCY,
        ]
    },
    cmdclass={"build_ext": build_ext},
)
