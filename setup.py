import setuptools

with open("README.md") as f:
    long_description = f.read()

setuptools.setup(
    name="pod-ip-overlap-killer",
    version="0.0.1",
    description="Detect and delete pods whose IP collides with a service IP",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(),
    install_requires=["aiohttp>=3.8", "kubernetes_asyncio"],
    extras_require={"test": ["pytest", "trustme"]},
    entry_points={
        "console_scripts": ["pod-ip-overlap-killer=overlapkiller.__main__:main"]
    },
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
    ],
    python_requires=">=3.8",
)
