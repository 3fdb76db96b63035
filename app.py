import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify

from notion_source import NOTION_API_URL, NOTION_VERSION

load_dotenv()

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = Flask(__name__)
app.config['NOTION_API_KEY'] = os.getenv('NOTION_API_KEY')
app.config['NOTION_ACRONYM_DATABASE_ID'] = os.getenv('NOTION_ACRONYM_DATABASE_ID')
app.config['NOTION_API_URL'] = os.getenv('NOTION_API_URL', NOTION_API_URL)
app.config['NOTION_VERSION'] = os.getenv('NOTION_VERSION', NOTION_VERSION)
app.config['NOTION_TIMEOUT'] = float(os.getenv('NOTION_TIMEOUT', '30'))

from api import api_bp

app.register_blueprint(api_bp)


@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


if __name__ == '__main__':
    app.run()
