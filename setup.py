from setuptools import setup, find_packages

setup(
    name="pixevo",
    version="0.1.0",
    packages=find_packages(include=["pixevo", "pixevo.*"]),
    python_requires=">=3.9",
    install_requires=[
        # System
        'python-dotenv',

        # Data Handling
        'numpy',
        'pandas',

        # Images
        'Pillow>=9.1',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
            'pytest-mock>=3.10.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'pixevo = pixevo.cli.pixevo:main',
        ],
    },
    include_package_data=True,
    description="Genetic image reconstruction with structural similarity fitness",
)
