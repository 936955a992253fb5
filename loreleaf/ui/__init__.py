"""Interface models for chapter content components and navigation buttons."""