from setuptools import setup, find_packages

with open('requirements.txt') as f:
    install_requires = f.read().splitlines()

with open('README.md', 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='running-stats',
    version='0.1.0',
    description='Streaming mean, covariance and correlation with Welford updates and exact merging',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(include=['running_stats', 'running_stats.*']),
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    license='MIT',
    python_requires='>=3.11',
)
