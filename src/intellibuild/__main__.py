from sanic.log import logger

from intellibuild.config import Config
from intellibuild.web import create_app


def main():
    config = Config()
    app = create_app(config)
    config.print_config()

    logger.info("Starting IntelliBuild CI on %s:%d", config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT, single_process=True)


if __name__ == "__main__":
    main()
