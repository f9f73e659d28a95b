"""Export-Modul: Darstellung des Tagesrasters im Terminal (rich)."""
