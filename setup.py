import re
from pathlib import Path

from setuptools import find_namespace_packages, setup

name = "anon_engine"
install_requires = [
    "Faker",
    "PyYAML",
    "concurrent-log-handler",
    "prettytable",
]
extras_require = {
    "test": [
        "pytest",
    ],
}


def read_version() -> str:
    # the package itself needs its dependencies to import, so read the file
    version_file = Path(__file__).parent / name / "version.py"
    return re.search(r'__version__ = "([^"]+)"', version_file.read_text()).group(1)


if __name__ == "__main__":
    setup(
        name="anon-engine",
        version=read_version(),
        description="Consistent, format-preserving anonymization processors for database column values",
        classifiers=[
            "Intended Audience :: Developers",
            "Intended Audience :: System Administrators",
            "Programming Language :: Python",
            "Programming Language :: Python :: 3",
            "Topic :: Database",
        ],
        license="MIT",
        keywords="database anonymization processors",
        python_requires=">=3.8",
        packages=find_namespace_packages(include=["anon_engine", "anon_engine.*"]),
        package_data={name: ["dict/*"]},
        include_package_data=True,
        install_requires=install_requires,
        extras_require=extras_require,
        entry_points={
            "console_scripts": [
                "anon_engine = anon_engine.cli:main",
            ],
        },
    )
