"""
Setup configuration for audio-defects component.
"""

from setuptools import setup, find_packages

setup(
    name='audio-defects',
    version='1.0.0',
    description='Streaming detection of digital silence, overmodulation and hold values in PCM WAV files',
    author='Digital Audio Error Detection Team',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.11',
    install_requires=[
        'boto3>=1.28.0',
        'numpy>=1.24.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'pylint>=2.17.0',
            'flake8>=6.0.0',
            'black>=23.0.0',
            'mypy>=1.4.0',
        ]
    },
    entry_points={
        'console_scripts': [
            'audio-defects=audio_defects.cli:main',
        ],
    },
)
