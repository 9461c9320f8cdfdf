"""Export Google People contacts as vCard 3.0."""
