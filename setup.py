import re
from pathlib import Path

from setuptools import find_packages, setup

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")


def load_requirements(filename="requirements.txt"):
    requirements_path = this_directory / filename
    if not requirements_path.exists():
        print(f"Warning: {filename} not found. Proceeding without it.")
        return []
    with open(requirements_path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


def get_version(package_init_file_path: Path) -> str:
    """
    Reads the __version__ string from the given package's __init__.py file.
    """
    if not package_init_file_path.exists():
        raise RuntimeError(
            f"Package __init__.py not found at: {package_init_file_path}"
        )

    init_py_content = package_init_file_path.read_text(encoding="utf-8")
    match = re.search(
        r"^__version__\s*=\s*['\"]([^'\"]*)['\"]", init_py_content, re.MULTILINE
    )
    if match:
        return match.group(1)
    raise RuntimeError(
        f"Unable to find __version__ string in {package_init_file_path}"
    )


package_init_path = this_directory / "plugin_update_check" / "__init__.py"
VERSION = get_version(package_init_path)

setup(
    name="plugin-update-check",
    version=VERSION,
    author="Els_kom org.",
    author_email="elskom@users.noreply.github.com",
    description="Checks plugin sources for updates and installs or removes plugin files.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Elskom/PluginUpdateCheck",
    license="MIT",
    packages=find_packages(
        exclude=["tests*", "build*", "dist*", "*.egg-info*", "scripts*"]
    ),
    include_package_data=True,
    install_requires=load_requirements(),
    extras_require={
        "test": load_requirements("requirements-dev.txt"),
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "plugin-update-check=plugin_update_check.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Libraries",
        "Environment :: X11 Applications :: Qt",
        "Framework :: PySide",
    ],
    keywords="plugins update checker manifest zip PySide6 requests",
    project_urls={
        "Source": "https://github.com/Elskom/PluginUpdateCheck",
    },
)
