"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='reckon-expr',
	author='Beth Kjos',
	author_email='kjosib@gmail.com',
	version='0.1.0',
	packages=['reckon'],
	entry_points={
		'console_scripts': ["reckon = reckon.cmdline:main"],
	},
	license='MIT',
	description='A single-pass arithmetic-expression evaluator, generic over integer and floating numeric types',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Scientific/Engineering :: Mathematics",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.3",
	],
)
