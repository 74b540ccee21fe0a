from setuptools import find_packages, setup
from pathlib import Path


VERSION = "0.1.0"

current_dir = Path(__file__).parent
requirements_path = current_dir / "requirements.txt"


setup(
    name="tooltailor",
    description="Turn documented Python callables into JSON Schema tool definitions for LLM function calling",
    long_description=open(current_dir / "README.md").read(),
    long_description_content_type="text/markdown",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*", "examples", "bin", "dist"]),
    python_requires=">=3.9",
    license="MPL-2.0",
    include_package_data=True,
    install_requires=[
        # This reads the requirements from the requirements.txt file
        line.strip()
        for line in open(requirements_path, "r")
        if line.strip() and not line.startswith("#")
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
    ],
)
