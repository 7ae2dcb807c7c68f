from setuptools import setup, find_packages

setup(
    name="latticerational",
    version="0.3",
    description="Exact rational arithmetic for crystallographic lattice transformations",
    long_description=("Exact rational numbers and rational matrices over signed 64-bit integers with overflow "
                      "detection, cofactor determinants, Gaussian elimination and unit cell transformation helpers"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.8",
    packages=find_packages(include=["latticerational", "latticerational.*"]),
    install_requires=["numpy", "sympy"],
    extras_require={"test": ["pytest", "pytest-timeout"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Physics"
    ],
    keywords=["crystallography", "rational arithmetic", "unit cell", "lattice"],
    zip_safe=False,
)
