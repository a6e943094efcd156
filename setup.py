from setuptools import setup, find_packages

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setup(
    name='exactinf',
    version='1.0.0',
    description='Canonical joint-state indexing and exact inference for discrete factor graphs',
    license='Apache License 2.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=requirements,
    extras_require={'test': ['parameterized', 'pytest']},
)
