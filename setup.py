from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="dwgraph",
    version="0.1.0",
    description="Shortest paths, connectivity and persistence for directed weighted graphs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"dwgraph.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["networkx", "jsonschema", "PyYAML"],
    extras_require={"dev": ["pytest"]},
    tests_require=["pytest", "networkx"],
    entry_points={"console_scripts": ["dwgraph=dwgraph.cli:main"]},
)
