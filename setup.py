from setuptools import setup, find_packages
setup(
    name='td-secrets',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    description='Workflow operator that pushes project secrets to a remote workflow server.',
    author='Your Name',
    author_email='youremail@example.com',
    python_requires='>=3.8',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'requests>=2.25.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
)
