"""Azure Function App provisioner.

Single-run workflow that provisions a resource group and storage account,
scaffolds a Functions project with Azure Functions Core Tools, creates and
publishes the function app with the Azure CLI, and optionally tears the
resource group down again.
"""

__version__ = "0.1.0"
