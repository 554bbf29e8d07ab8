from setuptools import setup, find_packages

setup(
    name="ecnn",
    version="0.1.0",
    description="ECNN: per-channel convolution engine for evolutionary image filters",
    packages=find_packages(include=["ecnn", "ecnn.*"]),
    python_requires=">=3.10",
    install_requires=[
        "torch>=2.1.0",
        "einops>=0.7.0",
        "numpy>=1.24",
    ],
    extras_require={
        "image": ["Pillow>=9.0"],
        "all": ["Pillow>=9.0"],
        "dev": ["pytest>=7.0", "ruff>=0.1.0", "Pillow>=9.0"],
    },
)
