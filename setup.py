"""Install the Pokédex auth package."""

from setuptools import setup, find_packages

setup(
    name='pokedex-auth',
    version='0.1.0',
    packages=find_packages(include=['pokedex', 'pokedex.*'],
                           exclude=['*.tests', '*.tests.*']),
    package_data={
        'pokedex.edge': ['templates/edge/*.html'],
    },
    entry_points={
        'console_scripts': [
            'generate-token=pokedex.generate_token:generate_token',
        ],
    },
    python_requires='>=3.8',
    install_requires=[
        "flask>=2.3",
        "werkzeug>=2.3",
        "pyjwt>=2.4",
        "pytz",
        "requests",
        "click",
        "python-json-logger>=2.0",
    ],
    extras_require={
        'test': [
            "pytest",
            "hypothesis",
        ],
    },
    zip_safe=False
)
