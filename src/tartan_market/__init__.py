"""Tartan Market: marketplace and commission listings API."""
