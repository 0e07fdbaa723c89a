import os, sys
from pathlib import Path
HERE = Path(os.path.realpath(__file__)).parent
sys.path = [str(p) for p in set([
    HERE.joinpath("src")
]+sys.path)]
import setuptools
from run_megahit.utils import USER, NAME, ENTRY_POINTS, VERSION
SHORT_SUMMARY = "Finds read files, classifies them by mate and runs the MEGAHIT assembler on them"
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

if __name__ == "__main__":
    setuptools.setup(
        name=NAME,
        version=VERSION,
        author="Ken Youens-Clark",
        author_email="kyclark@email.arizona.edu",
        description=SHORT_SUMMARY,
        long_description=long_description,
        long_description_content_type="text/markdown",
        url=f"https://github.com/{USER}/{NAME}",
        project_urls={
            "Bug Tracker": f"https://github.com/{USER}/{NAME}/issues",
        },
        classifiers=[
            "Programming Language :: Python :: 3",
            "Operating System :: Unix",
        ],
        package_dir={"": "src"},
        packages=setuptools.find_packages(where="src"),
        package_data={
            "":[ # "" is all packages
                "version.txt",
            ],
        },
        entry_points={
            'console_scripts': ENTRY_POINTS,
        },
        python_requires=">=3.10",
        install_requires=[
            "pandas",
            "pyyaml",
        ],
        extras_require={
            "test": ["pytest"],
        },
    )
