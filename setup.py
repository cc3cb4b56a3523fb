"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='kindling-lang',
	version='0.1.0',
	packages=['kindling', "kindling.tree_walker", ],
	entry_points={
		'console_scripts': ["kindling = kindling.cmdline:main"],
	},
	license='MIT',
	description='A small embeddable tree-walking interpreter for a C-like scripting language, with deferred tasks',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
