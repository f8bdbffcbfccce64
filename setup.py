#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import setuptools


setuptools.setup(
    name="sdbootconf",
    version="0.1.0",
    description="Reading and rewriting systemd-boot loader and entry "
    "configuration.",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Boot",
        "Topic :: System :: Systems Administration"
    ],
    keywords="efi systemd-boot boot loader entries",
    author="Thomas Müller",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    install_requires=[
        "argh",
        "jsonschema"
    ],
    extras_require={
        "test": [
            "pytest"
        ]
    },
    entry_points={
        "console_scripts": [
            "sdbootconf=sdbootconf.client.__main__:main"
        ]
    },
    zip_safe=True,
    python_requires=">=3.6")
