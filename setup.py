from setuptools import setup, find_packages

setup(
    name="dirview",
    version="0.1.0",
    description="A desktop file browser built on pywebview",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"dirview": ["static/*"]},
    install_requires=[
        "pywebview",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dirview=dirview.cli:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
)
