from setuptools import setup, find_packages

# Use README.md as the long description
with open('README.md', encoding='utf-8') as f:
    long_description = f.read()

with open('requirements.txt', encoding='utf-8') as f:
    required = f.read().splitlines()

VERSION = "0.1.0"

if __name__ == '__main__':
    setup(
        name="dcmdisplay",
        version=VERSION,
        description="Display attributes of DICOM grayscale images",
        long_description=long_description,
        long_description_content_type="text/markdown",
        license='Apache Software License (http://www.apache.org/licenses/LICENSE-2.0)',
        python_requires='>=3.8, <4',
        package_dir={'': 'src'},
        packages=find_packages(where='src'),
        install_requires=required,
        extras_require={
            'test': ['pytest'],
        },
        include_package_data=True,
        keywords=['python', "medical imaging", "DICOM"],
        # Classifiers - the purpose is to create a wheel and upload it to PYPI
        classifiers=[
            'Development Status :: 3 - Alpha',

            # Indicate who your project is intended for
            'Intended Audience :: Developers',
            'Intended Audience :: Science/Research',
            'Topic :: Scientific/Engineering',
            'Operating System :: OS Independent',

            'Programming Language :: Python :: 3',
            'License :: OSI Approved :: Apache Software License',
        ],
    )
