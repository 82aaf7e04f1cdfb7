import re

from setuptools import find_packages, setup


with open("dotmath/_version.py", "rb") as fh:
    VERSION = re.search(r"__version__ = \"(.*?)\"", fh.read().decode()).group(1)

with open("dotmath/__init__.py", "rb") as fh:
    init_text = fh.read().decode()
    match = re.search(r"__pylinalg_version_range__ = \"(.*?)\", \"(.*?)\"", init_text)
    pylinalg_min_ver, pylinalg_max_ver = match.group(1), match.group(2)


runtime_deps = [
    "numpy",
    f"pylinalg>={pylinalg_min_ver},<{pylinalg_max_ver}",
]

extras_require = {
    "dev": [
        "black",
        "flake8",
        "flake8-black",
        "pep8-naming",
        "pytest",
        "setuptools",
        "wheel",
        "twine",
    ],
    "tests": [
        "pytest",
    ],
}


setup(
    name="dotmath",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8.0",
    install_requires=runtime_deps,
    extras_require=extras_require,
    license="BSD 2-Clause",
    description="Typed 3x3 and 4x4 matrices, quaternions and cached transforms",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    zip_safe=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
)
