# setup.py
from setuptools import setup, find_packages

setup(
    name="jlisp",
    version="0.3.0",
    packages=find_packages(include=["jlisp", "jlisp.*"]),
    package_data={"jlisp": ["prelude/*.lisp"]},
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["jlisp=jlisp.__main__:main"],
    },
    zip_safe=False,
)
