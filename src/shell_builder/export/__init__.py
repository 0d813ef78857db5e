"""Shell outputs: IFC files and PNG plan views."""
