"""Setup script for the Gravity recommendation engine client."""

from setuptools import setup, find_namespace_packages

if __name__ == "__main__":
    setup(
        name="gravity-client",
        version="1.0.1",
        description="Client for submitting events, items and users to the Gravity recommendation engine",
        author="Gravity Client Team",
        packages=find_namespace_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.11",
        install_requires=[
            "requests>=2.31",
            "urllib3>=2.0",
            "pydantic>=2.4",
        ],
        extras_require={
            "test": ["pytest>=7.0"],
        },
    )
