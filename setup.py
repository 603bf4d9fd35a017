"""
Setup script for Chalawa - Interoperable encryption in transit.

This library provides:
- Diffie-Hellman key agreement over a fixed 2048-bit MODP group
- Optional password mixing into key generation and shared secrets
- Password- and shared-secret-derived AES-256-GCM encryption
- A byte-exact ciphertext:iv:tag wire format shared across implementations
- Cross-implementation compatibility vectors
"""

from setuptools import setup, find_packages
import os

this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='chalawa',
    version='1.0.0',
    author='chalawa contributors',
    description='Interoperable Diffie-Hellman + AES-256-GCM encryption in transit with a byte-exact wire format',
    long_description=long_description,
    long_description_content_type='text/markdown',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Security :: Cryptography',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
    install_requires=[
        'cryptography>=42.0.4',
        'tomli>=2.0.1; python_version < "3.11"',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
        ],
    },
)
