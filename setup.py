from setuptools import setup

def read(file_name):
  with open(file_name) as f:
    return f.read()

setup(
  name='b2client',
  version='0.1.0',
  description='Small client for the Backblaze B2 native API',
  long_description=read('README.md'),
  long_description_content_type='text/markdown',
  classifiers=[
    'Development Status :: 3 - Alpha',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3'
  ],
  keywords='backblaze b2',
  packages=['b2client'],
  python_requires='>=3.8',
  install_requires=['requests'],
  extras_require={'test': ['pytest']}
)
