from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pyfastresample",
    version="0.0.1",
    author="Boris Gailleton",
    author_email="boris.gailleton@univ-rennes.fr",
    description="GPU image resampling: separable filter resize and box-average reduce",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pyfastresample", "pyfastresample.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Scientific/Engineering :: Image Processing",
    ],
    python_requires=">=3.10",
    install_requires=[
        "taichi>=1.4.0",
        "numpy>=1.20.0",
        "click>=7.0",
        "pillow>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
    keywords="image resize resampling lanczos srgb GPU taichi",
    entry_points={
        "console_scripts": [
            "pfr-resize=pyfastresample.cli.rastermanip_commands:image_resize",
            "pfr-reduce=pyfastresample.cli.rastermanip_commands:image_reduce",
        ],
    },
)
