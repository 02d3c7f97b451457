from setuptools import setup, find_packages

setup(
    name="strnw",
    version="0.1.0",
    description="Semi-global affine-gap alignment kernel for STR read re-alignment",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["strnw", "strnw.*"]),

    install_requires=[
        "numpy"
    ],
    extras_require={
        "plot": [
            "matplotlib",
            "seaborn",
        ],
        "dev": [
            "pytest>=7.0",
            "pytest-cov",
        ],
        "all": [
            "matplotlib",
            "seaborn",
            "pytest>=7.0",
            "pytest-cov",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    python_requires='>=3.9',
)
