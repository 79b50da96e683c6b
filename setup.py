from setuptools import setup, find_packages

setup(
    name="exam-entry-toolkit",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "openpyxl>=3.0",
        "python-docx>=0.8",
        "reportlab>=3.6",
        "cryptography>=41.0",
        "sqlalchemy>=2.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "exam-entry=exam_entry_toolkit.cli:main",
        ],
    },
)
