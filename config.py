import os
import logging
from flask import Flask
from flask_sqlalchemy import SQLAlchemy

logging.basicConfig(level=os.environ.get("VOPRF_LOG_LEVEL", "INFO"))

app = Flask(__name__)

app.config["SQLALCHEMY_ECHO"] = False
app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get("VOPRF_DATABASE_URI", 'sqlite:///database.db')
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

# database | environment
app.config['VOPRF_SECRET_STORE'] = os.environ.get("VOPRF_SECRET_STORE", "database")
app.config['VOPRF_SECRET_NAME'] = os.environ.get("VOPRF_SECRET_NAME", "seed")
app.config['VOPRF_SERVER_INFO'] = os.environ.get("VOPRF_SERVER_INFO", "voprf-server").encode('utf-8')

db = SQLAlchemy(app)
