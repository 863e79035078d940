from ..data.markdown_adapter import MarkdownItBookParser

# Singleton Instance for easy import
parser = MarkdownItBookParser()
