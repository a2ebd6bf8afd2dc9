import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="vim_schema_to_code",
    version="0.3.0",
    description="Generate typed Python packages for the vSphere API from a JSON schema description",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Intended Audience :: Developers",
    ],
    keywords="vsphere vim soap schema code generation python dataclass template",
    license="MPL-2.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "black>=23.0.0",
        "click>=8.0.0",
        "jinja2>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "vim_schema_to_code=vim_schema_to_code.vim_schema_to_code:vim_schema_to_code",
        ],
    },
    include_package_data=True,
    package_data={
        "vim_schema_to_code": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
