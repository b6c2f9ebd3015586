"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='plc-lang',
	version='0.1.0',
	packages=['plc', "plc.static", "plc.tree_walker", ],
	entry_points={
		'console_scripts': ["plc = plc.cmdline:main"],
	},
	license='MIT',
	description='A small imperative scripting language: lexer, parser, static checker and tree-walking interpreter',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
		"Environment :: Console",
	],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
