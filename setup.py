from setuptools import setup, find_packages

setup(
    name="matchain",
    version="1.0.0",
    packages=find_packages(include=["matchain", "matchain.*"]),
    install_requires=["numpy>=1.19.0"],
    extras_require={
        "examples": ["matplotlib>=3.3.0"],
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.7",
)
