from setuptools import find_packages, setup

required_packages=[
    'jax>=0.4.28',
    'flax>=0.8.4',
    'numpy',
    'einops',
    'matplotlib',
    'colorlog',
]

setup(
    name='hilbertax',
    packages=find_packages(include=['hilbertax', 'hilbertax.*']),
    version='0.1.0',
    description='N-dimensional Hilbert curve transforms in Python and JAX',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    author='Ashish Kumar Singh',
    author_email='ashishkmr472@gmail.com',
    install_requires=required_packages,
    extras_require={
        'test': ['pytest'],
    },
)
