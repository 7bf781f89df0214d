from setuptools import setup, find_packages

setup(
    name="sitefeed",
    version="1.0.0",
    description="JSON Feed generator for static sites — feed.json plus a discovery <link> tag",
    author="sitefeed contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "beautifulsoup4>=4.12.0",
        "python-dateutil>=2.8.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.0",
        "markdown>=3.4",
        "jinja2>=3.1",
        "markupsafe>=2.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "sitefeed=sitefeed.cli:main",
        ],
    },
    python_requires=">=3.9",
)
