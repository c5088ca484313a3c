from setuptools import find_packages, setup

setup(
    name='keyguard-messages',
    version='1.0.0',
    description='Wire codec for keyguard password enrollment and verification messages',
    author='isantolin',
    author_email='',
    packages=find_packages(include=['keyguard', 'keyguard.*']),
    python_requires='>=3.11',
    install_requires=[
        'construct',
        'msgspec',
        'marshmallow>=3.13',
        'prometheus-client',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'keyguard-msgdebug=keyguard.tools.message_debug:main',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX :: Linux',
    ],
)
