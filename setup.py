"""
setup.py for package "sensorimotor_info"
Pure Python implementation - no compilation required.
"""
from setuptools import setup, find_packages

setup(
    name='sensorimotor_info',
    version='1.0.0',
    description="Mutual information and entropies of sensorimotor trajectories (k-NN estimator)",
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20',
        'scipy>=1.7',
    ],
    extras_require={
        'dev': ['pytest'],
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Scientific/Engineering :: Information Analysis',
    ],
)
