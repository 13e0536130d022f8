"""
Subway Admin Backend - Package Setup

지하철 역, 노선, 구간 관리 API 서버
"""

from setuptools import setup, find_packages


setup(
    name='subway-admin',
    version='1.0.0',
    description='Subway station, line and section management backend',
    long_description='''
    FastAPI backend for managing a subway network. Stations and lines are
    stored in PostgreSQL (or memory for local development), and each line's
    ordered station list is rebuilt from its sections on read.
    ''',
    packages=find_packages(include=['subway', 'subway.*']),
    install_requires=[
        'fastapi>=0.100.0,<0.137',
        'uvicorn>=0.22.0',
        'pydantic>=2.0',
        'psycopg2-binary>=2.9',
        'python-dotenv>=1.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-mock>=3.10',
            'pytest-cov>=4.0',
            'httpx>=0.24',
        ],
        'load': [
            'locust>=2.15',
        ],
    },
    zip_safe=False,
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Framework :: FastAPI',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
