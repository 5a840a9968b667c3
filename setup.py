from setuptools import setup

setup(name='thenable',
      version='0.1',
      description='Promises/A+ style promises with pluggable action queues.',
      license='MIT',
      classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries',
      ],
      packages=['thenable'],
      python_requires='>=3.6',
      extras_require={'test': ['pytest']},
      zip_safe=True)
