"""Setup configuration for media-flattener package."""

from setuptools import find_packages, setup

# Read version from __version__.py
version = {}
with open("src/python/media_flattener/__version__.py") as f:
    exec(f.read(), version)

# Read README
with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="media-flattener",
    version=version["__version__"],
    description="Flatten a tree of photos and videos into one folder with canonical, collision-free names",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Media Flattener Team",
    python_requires=">=3.11",
    package_dir={"": "src/python"},
    packages=find_packages(where="src/python", include=["media_flattener", "media_flattener.*"]),
    install_requires=[
        "pyyaml>=6.0.1",
        "pandas>=2.1.4",
        "pillow>=10.2.0",
        "pillow-heif>=0.16.0",
        "tqdm>=4.66.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "media-flattener=media_flattener.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
    ],
)
