# type: ignore
import ast
import re

import setuptools

_version_re = re.compile(r"__version__\s+=\s+(.*)")
with open("sqlcase/__init__.py", "rb") as f:
    _match = _version_re.search(f.read().decode("utf-8"))
    if _match is None:
        print("No version found")
        raise SystemExit(1)
    version = str(ast.literal_eval(_match.group(1)))


with open("requirements.txt", "r") as f:
    install_requires = [
        line.strip().replace("==", ">=") for line in f.readlines() if line.strip()
    ]

setuptools.setup(
    name="sqlcase",
    version=version,
    url="",
    author="",
    description="YAML-driven SQL integration test cases for SQL engines.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(
        exclude=[
            "dist",
            "build",
            "*.tests",
            "*.tests.*",
            "tests.*",
            "tests",
            "docs",
            ".github",
            "",
        ]
    ),
    package_data={
        "sqlcase": ["fixtures/integration/v1/*.yaml", "py.typed"],
    },
    install_requires=install_requires,
    python_requires=">=3.11",
    extras_require={
        "postgres": ["psycopg2-binary"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["sqlcase=sqlcase.scripts.sqlcase:cli"],
    },
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
