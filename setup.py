from setuptools import setup

setup(
    name="nx-colorref",
    version="0.0.1",
    description="Color refinement graph isomorphism backend for NetworkX",
    packages=["nx_colorref"],
    python_requires=">=3.9",
    install_requires=[
        "networkx>=3.3",
        "numpy>=1.21",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "networkx.backends": ["colorref = nx_colorref.backend:backend"],
        "networkx.backend_info": ["colorref = nx_colorref.backend:get_info"],
    },
)
