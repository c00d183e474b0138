from loguru import logger

# Library stays silent unless the application opts in with logger.enable("seometa")
logger.disable("seometa")
