import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="blamshot",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Halo saved screenshots for humans",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        'pillow',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    scripts=[
        'scripts/shotinfo.py',
        'scripts/shotextract.py',
        'scripts/shotinject.py',
        'scripts/shotdisplay.py',
    ],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
        "Operating System :: OS Independent",
    ],
)
