#!/usr/bin/env python
# Created by "Thieu" at 13:24, 25/05/2022 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import setuptools
import os
import re


with open("requirements.txt") as f:
    REQUIREMENTS = f.read().splitlines()


def get_version():
    init_path = os.path.join(os.path.dirname(__file__), 'xfis', '__init__.py')
    with open(init_path, 'r', encoding='utf-8') as f:
        init_content = f.read()
    version_match = re.search(r"^__version__ = ['\"]([^'\"]+)['\"]", init_content, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


def readme():
    with open('README.md', encoding='utf-8') as f:
        res = f.read()
    return res


setuptools.setup(
    name="xfis",
    version=get_version(),
    author="Thieu",
    author_email="nguyenthieu2102@gmail.com",
    description="X-FIS: Mamdani and Sugeno Fuzzy Inference Systems with Hybrid-Learning ANFIS",
    long_description=readme(),
    long_description_content_type="text/markdown",
    keywords=[
        "fuzzy logic", "fuzzy inference system", "Mamdani fuzzy model", "Takagi-Sugeno fuzzy model",
        "adaptive neuro-fuzzy inference system", "ANFIS", "hybrid learning", "least squares estimation",
        "gradient descent", "subtractive clustering", "rule extraction", "rule-based system",
        "membership functions", "Gaussian membership function", "triangular membership function",
        "trapezoidal membership function", "fuzzy rule parser", "defuzzification", "centroid",
        "singular value decomposition", "pseudo-inverse", "Golub-Reinsch", "fuzzy transform",
        "time series", "regression", "machine learning", "soft computing", "computational intelligence",
    ],
    url="https://github.com/thieu1995/X-FIS",
    project_urls={
        'Source Code': 'https://github.com/thieu1995/X-FIS',
        'Bug Tracker': 'https://github.com/thieu1995/X-FIS/issues',
    },
    packages=setuptools.find_packages(exclude=['tests*', 'examples*']),
    include_package_data=True,
    license="GPLv3",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Natural Language :: English",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Scientific/Engineering",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    install_requires=REQUIREMENTS,
    extras_require={
        "dev": ["pytest>=7.1.2", "pytest-cov>=4.0.0", "flake8>=4.0.1"],
    },
    python_requires='>=3.8',
)
