import setuptools

setuptools.setup(
	name='syntaxer',
	version='0.1.0.0',
	packages=[
		'syntaxer',
		'syntaxer.parsing',
		'syntaxer.scanning',
		'syntaxer.support',
	],
	description='Declare record shapes with PEG-style rule strings per field, and parse text straight into them',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
	],
)
