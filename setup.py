from setuptools import setup, find_packages

setup(
    name="quantum_zkp",
    version="1.0.0",
    description="Hash-chain, lattice, multivariate and hybrid zero-knowledge style proofs",
    author="quantum_zkp Team",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
