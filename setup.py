from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="fractal-bitmap",
    version="1.0.0",
    author="Fractal Bitmap",
    description="Parallel Mandelbrot escape-time rendering to uncompressed bitmaps",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["fractal_bitmap", "fractal_bitmap.*"]),
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0.0", "Pillow>=9.0.0"],
    },
    entry_points={
        "console_scripts": [
            "fractal-bmp=fractal_bitmap.cli.main:main",
        ],
    },
)
