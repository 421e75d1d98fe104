from setuptools import setup, find_packages

setup(
    name="glitch-fx",
    version="0.1.0",
    description="Periodic glitch distortion engine: band displacement + chromatic ghosting",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "scipy>=1.10",
        "Pillow>=10.0",
        "moviepy>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "glitchfx=glitchfx.cli:main",
        ],
    },
)
