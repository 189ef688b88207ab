import setuptools

setuptools.setup(
    name="libmgen",
    version="1.0.0",
    author="libmgen developers",
    description="a libm code generator (minimax approximations, C and Python backends)",
    packages=setuptools.find_packages(include=["libmgen_core", "libmgen_core.*", "libmgen_functions", "libmgen_functions.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "mpmath",
        "numpy",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "libmgen=libmgen_functions.libm_gen:main",
        ],
    },
    python_requires='>=3.9',
)
