#!/usr/bin/env python3
from setuptools import setup
from luabundler import VERSION

DESCRIPTION = 'A Python tool that bundles a tree of Lua/Luau modules into a single, self-contained script.'


def convert_rst(markdown_text, fallback_rst=None):
    try:
        import pypandoc
        return pypandoc.convert_text(markdown_text, 'rst', format='md')
    except (ImportError, OSError):
        try:
            import m2r2
            return m2r2.convert(markdown_text)
        except ImportError:
            return fallback_rst or markdown_text


def load_requirements(requirements_file="requirements.txt"):
    try:
        with open(requirements_file, 'r') as fin:
            requirements = [line.split('#')[0].strip() for line in fin]
            requirements = [line for line in requirements if line]
        return requirements
    except FileNotFoundError:
        return []


with open('README.md', 'r') as f:
    long_description = convert_rst(f.read().replace('\n\n', '\n'))

if __name__ == "__main__":
    setup(
        name='luabundler',
        version=VERSION,
        description=DESCRIPTION,
        long_description_content_type="text/x-rst",
        long_description=long_description,
        keywords='packaging lua luau bundler',
        author='luabundler contributors',
        classifiers=[
            'License :: OSI Approved :: MIT License',
            'Operating System :: OS Independent',
            'Programming Language :: Python',
            'Programming Language :: Lua',
        ],
        license='MIT',
        install_requires=load_requirements(),
        extras_require={
            'test': load_requirements("requirements-test.txt"),
        },
        test_suite="tests",
        python_requires='>=3.8',
        packages=['luabundler'],
        package_data={
            '': ['requirements.txt', 'requirements-test.txt', 'README.md'],
        },
    )
