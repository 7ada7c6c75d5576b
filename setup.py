from setuptools import setup, find_namespace_packages

setup(
    name="whatsapp-health-assistant",
    version="0.1.0",
    description="A multilingual WhatsApp health assistant with disease outbreak alerts, built on FastAPI, MongoDB and Gemini",
    author="PhantomFuryX",
    author_email="madhabpoulikwork@gmail.com",
    packages=find_namespace_packages(include=["healthbot*", "routes*"]),
    py_modules=["main"],
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn[standard]>=0.18.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=0.21.0",
        "motor>=3.3.0",
        "pymongo>=4.0.0",
        "httpx>=0.24.0",
        "google-generativeai>=0.3.0",
        "apscheduler>=3.10,<4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "healthbot=main:main",
        ],
    },
)
