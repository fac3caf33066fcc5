""" curvekit build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import curvekit

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=curvekit.name,
    version=curvekit.__version__,
    url="https://curvekit.org",
    project_urls={
        "Download": "https://github.com/curvekit/curvekit/releases",
        "GitHub": "https://github.com/curvekit/curvekit",
        "Issues": "https://github.com/curvekit/curvekit/issues",
        "Pull Requests": "https://github.com/curvekit/curvekit/pulls",
    },
    license=curvekit.__license__,
    author=curvekit.__author__,
    author_email=curvekit.__author_email__,
    description="A library for generic elliptic curve cryptography",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"curvekit": ["data/*.json"]},
    install_requires=["dataclasses_json"],
    extras_require={"test": ["pytest", "coincurve<19"]},
    keywords=(
        "cryptography elliptic-curves weierstrass edwards ecdsa eddsa ecdh "
        "RFC-6979 RFC-8032 ed25519 ed448 secp256k1 P-256"
    ),
    python_requires=">=3.7",
    classifiers=[
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
